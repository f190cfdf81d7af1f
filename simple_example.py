"""
Simple Example: PDF to structured Markdown
===========================================
This is a minimal example showing how to:
1. Convert a PDF to Markdown using pdf-structure-markdown
2. Inspect the per-page diagnostics
3. Re-read the Markdown and check it classifies the same way
"""

import logging

from pdf_structure_markdown import MarkdownPipeline, PDFConverter

logging.basicConfig(level=logging.INFO)

# Step 1: Convert PDF to Markdown
print("Step 1: Converting PDF to Markdown...")
with PDFConverter("invoice.pdf", output_dir="output") as converter:
    result = converter.save(create_debug_images=True)
print("✅ Markdown saved to output/invoice.md")

# Step 2: Diagnostics
print("\nStep 2: Diagnostics")
for failure in result.failures:
    print(f"  skipped: {failure}")
for ambiguity in result.diagnostics:
    print(f"  ambiguous: {ambiguity}")

# Step 3: Round trip
print("\nStep 3: Re-reading the Markdown...")
pipeline = MarkdownPipeline(converter.options)
again = pipeline.convert_markdown(result.markdown)
same = [b.signature() for b in again.blocks] == [b.signature() for b in result.blocks]
print(f"Structure preserved: {same}")

print("\n" + "=" * 60)
print("MARKDOWN PREVIEW:")
print("=" * 60)
print(result.markdown[:500] + "...")
