"""
Page-at-a-time conversion pipeline: extract, classify, emit.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .classifiers import ClassificationResult, StructureClassifier
from .config import ConversionOptions
from .errors import ClassificationAmbiguity, ExtractionError
from .extractors import LayoutExtractor
from .generators import MarkdownEmitter
from .models import ClassifiedBlock, PageObjects
from .readers import MarkdownReader

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Outcome of converting one page."""
    page_number: int
    markdown: str = ""
    blocks: List[ClassifiedBlock] = field(default_factory=list)
    ambiguities: List[ClassificationAmbiguity] = field(default_factory=list)
    error: Optional[ExtractionError] = None
    processing_time: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ConversionResult:
    """Outcome of converting a document."""
    markdown: str = ""
    pages: List[PageResult] = field(default_factory=list)

    @property
    def failures(self) -> List[ExtractionError]:
        return [page.error for page in self.pages if page.error is not None]

    @property
    def diagnostics(self) -> List[ClassificationAmbiguity]:
        return [amb for page in self.pages for amb in page.ambiguities]

    @property
    def blocks(self) -> List[ClassifiedBlock]:
        return [block for page in self.pages for block in page.blocks]


class MarkdownPipeline:
    """
    Runs extraction, classification and emission for each page.

    Pages share no mutable state, so they may be processed concurrently;
    their Markdown is joined in page order.

    Example:
        pipeline = MarkdownPipeline()
        result = pipeline.convert(pages)
        print(result.markdown)
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        """
        Initialize the pipeline.

        Args:
            options: Conversion options (defaults are used when omitted)
        """
        self.options = options or ConversionOptions()
        self.extractor = LayoutExtractor(self.options)
        self.classifier = StructureClassifier(self.options)
        self.emitter = MarkdownEmitter(self.options.max_heading_level)

    def classify_page(self, page: PageObjects) -> ClassificationResult:
        """
        Extract and classify one page.

        Raises:
            ExtractionError: If the page has nothing to extract
        """
        return self.classifier.classify(self.extractor.extract(page))

    def process_page(self, page: PageObjects) -> PageResult:
        """
        Convert one page.

        Extraction failures are captured in the result; emission errors
        propagate.

        Args:
            page: Decoded page objects

        Returns:
            PageResult for the page

        Raises:
            EmissionError: If the page's blocks cannot be written as Markdown
        """
        start = time.perf_counter()
        try:
            classified = self.classify_page(page)
        except ExtractionError as exc:
            logger.warning("Skipping page %d: %s", page.page_number, exc.reason)
            return PageResult(
                page_number=page.page_number,
                error=exc,
                processing_time=time.perf_counter() - start,
            )

        markdown = self.emitter.emit(classified.blocks)
        return PageResult(
            page_number=page.page_number,
            markdown=markdown,
            blocks=classified.blocks,
            ambiguities=classified.ambiguities,
            processing_time=time.perf_counter() - start,
        )

    def convert(self, pages: Iterable[PageObjects]) -> ConversionResult:
        """
        Convert a document.

        Args:
            pages: Decoded pages, in any order

        Returns:
            ConversionResult with the joined Markdown and per-page results

        Raises:
            EmissionError: If any page cannot be emitted; the whole document
                is abandoned
        """
        pages = sorted(pages, key=lambda p: p.page_number)

        if self.options.workers > 1 and len(pages) > 1:
            with ThreadPoolExecutor(max_workers=self.options.workers) as executor:
                page_results = list(executor.map(self.process_page, pages))
        else:
            page_results = [self.process_page(page) for page in pages]

        parts = [result.markdown.rstrip("\n") for result in page_results if result.ok and result.markdown]
        markdown = self.options.page_separator.join(parts)
        if markdown:
            markdown += "\n"

        result = ConversionResult(markdown=markdown, pages=page_results)
        logger.info(
            "Converted %d pages (%d skipped, %d ambiguous blocks)",
            len(page_results), len(result.failures), len(result.diagnostics),
        )
        return result

    def convert_markdown(self, text: str) -> ConversionResult:
        """Re-read Markdown text and convert it again."""
        return self.convert(MarkdownReader(self.options).read(text))
