"""
PDF Structure Markdown - Convert PDF pages into structured Markdown.

A modular, object-oriented library that recovers headings, lists, tables
and images from the positioned objects of PDF pages and writes them as
Markdown.

Quick Start:
    from pdf_structure_markdown import PDFConverter

    with PDFConverter("document.pdf") as converter:
        result = converter.save()

Modular Components:
    - models: BoundingBox, PositionedBlock, ClassifiedBlock data classes
    - extractors: Layout extraction and PyMuPDF page decoding
    - detectors: Heading, list and table detection
    - classifiers: Structure classification of a page
    - generators: Markdown emission
    - readers: Markdown back into page objects
    - renderers: PDF page rendering
    - visualizers: Debug visualization
"""

__version__ = "0.1.0"

# Main converter
from .converter import PDFConverter

# Pipeline
from .config import ConversionOptions
from .pipeline import MarkdownPipeline, ConversionResult, PageResult

# Errors
from .errors import (
    StructureMarkdownError,
    ExtractionError,
    ClassificationAmbiguity,
    EmissionError,
)

# Models
from .models import (
    BoundingBox,
    ImageReference,
    PageObjects,
    PositionedBlock,
    BlockRole,
    ClassifiedBlock,
)

# Components
from .extractors import LayoutExtractor
from .classifiers import StructureClassifier
from .generators import MarkdownEmitter
from .readers import MarkdownReader

__all__ = [
    # Main classes
    "PDFConverter",
    "MarkdownPipeline",
    "ConversionOptions",
    "ConversionResult",
    "PageResult",

    # Errors
    "StructureMarkdownError",
    "ExtractionError",
    "ClassificationAmbiguity",
    "EmissionError",

    # Models
    "BoundingBox",
    "ImageReference",
    "PageObjects",
    "PositionedBlock",
    "BlockRole",
    "ClassifiedBlock",

    # Components
    "LayoutExtractor",
    "StructureClassifier",
    "MarkdownEmitter",
    "MarkdownReader",
]
