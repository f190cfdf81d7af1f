"""
Command-line interface.

Usage:
    pdf-structure-markdown document.pdf
    pdf-structure-markdown document.pdf -o out/document.md --workers 4
    pdf-structure-markdown notes.md --from-markdown -o notes.normalised.md
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConversionOptions
from .converter import PDFConverter
from .errors import EmissionError
from .pipeline import ConversionResult, MarkdownPipeline
from .readers import MarkdownReader
from .renderers import PageRenderer
from .visualizers import PageAnnotator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-structure-markdown",
        description="Convert a PDF into structured Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdf-structure-markdown report.pdf
  pdf-structure-markdown report.pdf -o out/report.md --assets-dir out/img
  pdf-structure-markdown report.pdf --workers 4 --debug-images
  pdf-structure-markdown notes.md --from-markdown
        """,
    )
    parser.add_argument("input", help="PDF file (or Markdown file with --from-markdown)")
    parser.add_argument("-o", "--output", default=None,
                        help="Markdown output path (default: output/<stem>.md)")
    parser.add_argument("--assets-dir", default=None,
                        help="Directory for extracted images (default: <output dir>/<stem>_assets)")
    parser.add_argument("--workers", type=int, default=1,
                        help="Pages converted concurrently")
    parser.add_argument("--dpi", type=int, default=150,
                        help="Resolution of debug images")
    parser.add_argument("--heading-ratio", type=float, default=None,
                        help="Font size ratio over body text that marks a heading")
    parser.add_argument("--page-separator", default=None,
                        help=r"Text placed between pages (escaped \n allowed)")
    parser.add_argument("--debug-images", action="store_true",
                        help="Write annotated page images next to the output")
    parser.add_argument("--from-markdown", action="store_true",
                        help="Re-read a Markdown file and normalise it through the pipeline")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def _report(result: ConversionResult) -> None:
    for failure in result.failures:
        print(f"warning: {failure}", file=sys.stderr)
    for ambiguity in result.diagnostics:
        logger.debug("%s", ambiguity)


def _convert_markdown(
    input_path: Path,
    output_path: Path,
    options: ConversionOptions,
    debug_images: bool = False,
) -> ConversionResult:
    pages = MarkdownReader(options).read(input_path.read_text(encoding="utf-8"))
    result = MarkdownPipeline(options).convert(pages)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.markdown, encoding="utf-8")
    logger.info("Saved markdown to: %s", output_path)

    if debug_images:
        renderer, annotator = PageRenderer(options.dpi), PageAnnotator()
        for page, page_result in zip(pages, result.pages):
            if not page_result.ok:
                continue
            image = annotator.annotate(renderer.render_objects(page), page_result.blocks, scale=renderer.scale)
            annotator.save(image, str(output_path.parent / f"{input_path.stem}_page{page.page_number}_debug.png"))
    return result


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = ConversionOptions.from_cli(
            workers=args.workers,
            dpi=args.dpi,
            heading_ratio=args.heading_ratio,
            page_separator=args.page_separator,
        )
    except ValueError as e:
        parser.error(str(e))

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"error: input not found: {input_path}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = Path("output") / f"{input_path.stem}.md"

    try:
        if args.from_markdown:
            result = _convert_markdown(input_path, output_path, options, args.debug_images)
        else:
            with PDFConverter(
                input_path,
                options=options,
                output_dir=output_path.parent,
                assets_dir=args.assets_dir,
            ) as converter:
                result = converter.save(output_path, create_debug_images=args.debug_images)
    except EmissionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    _report(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
