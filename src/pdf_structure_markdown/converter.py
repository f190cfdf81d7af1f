"""
Main PDF to Markdown converter using the page pipeline.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union
import numpy as np
import fitz  # PyMuPDF

from .config import ConversionOptions
from .extractors import PyMuPDFPageSource
from .models import ClassifiedBlock, PageObjects
from .pipeline import ConversionResult, MarkdownPipeline
from .renderers import PageRenderer
from .visualizers import PageAnnotator

logger = logging.getLogger(__name__)


class PDFConverter:
    """
    Main PDF to Markdown converter.

    Decodes pages with PyMuPDF, runs them through the extract/classify/emit
    pipeline and writes the Markdown plus extracted images.

    Example:
        with PDFConverter("document.pdf") as converter:
            result = converter.save()
    """

    def __init__(
        self,
        pdf_path: Union[str, Path],
        options: Optional[ConversionOptions] = None,
        output_dir: Union[str, Path] = "output",
        assets_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the converter.

        Args:
            pdf_path: Path to the PDF file
            options: Conversion options
            output_dir: Directory for the Markdown file, images and debug output
            assets_dir: Directory for extracted images (default: `<output_dir>/<stem>_assets`)
        """
        self.pdf_path = Path(pdf_path)
        if not self.pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        self.options = options or ConversionOptions()
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.doc = fitz.open(str(self.pdf_path))

        self.source = PyMuPDFPageSource(
            assets_dir=Path(assets_dir) if assets_dir else self.output_dir / f"{self.pdf_path.stem}_assets",
            relative_to=self.output_dir,
        )
        self.pipeline = MarkdownPipeline(self.options)
        self.renderer = PageRenderer(self.options.dpi)
        self.annotator = PageAnnotator()

    @property
    def page_count(self) -> int:
        """Number of pages in the PDF."""
        return len(self.doc)

    def read_page(self, page_num: int = 0) -> PageObjects:
        """Decode a single page (0-based index)."""
        return self.source.read(self.doc[page_num], page_number=page_num + 1)

    def read_pages(self, page_nums: Optional[Iterable[int]] = None) -> List[PageObjects]:
        """Decode several pages; all pages when `page_nums` is None."""
        if page_nums is None:
            page_nums = range(self.page_count)
        return [self.read_page(i) for i in page_nums]

    def create_annotated_image(
        self,
        page_num: int,
        blocks: List[ClassifiedBlock],
        output_path: Optional[str] = None,
    ) -> np.ndarray:
        """Create a debug visualization of a classified page (0-based index)."""
        page = self.doc[page_num]
        image = self.renderer.render(page)
        annotated = self.annotator.annotate(image, blocks, scale=self.renderer.scale)

        if output_path:
            self.annotator.save(annotated, output_path)

        return annotated

    def convert(
        self,
        page_nums: Optional[Iterable[int]] = None,
        create_debug_images: bool = False,
    ) -> ConversionResult:
        """
        Convert the PDF (or selected pages) to Markdown.

        Args:
            page_nums: 0-based page indices; all pages when None
            create_debug_images: Write an annotated PNG per converted page

        Returns:
            ConversionResult

        Raises:
            EmissionError: If a page cannot be emitted
        """
        pages = self.read_pages(page_nums)
        result = self.pipeline.convert(pages)

        if create_debug_images:
            for page_result in result.pages:
                if not page_result.ok:
                    continue
                debug_path = self.output_dir / f"{self.pdf_path.stem}_page{page_result.page_number}_debug.png"
                self.create_annotated_image(page_result.page_number - 1, page_result.blocks, str(debug_path))

        return result

    def save(
        self,
        output_path: Optional[Union[str, Path]] = None,
        page_nums: Optional[Iterable[int]] = None,
        create_debug_images: bool = False,
    ) -> ConversionResult:
        """Convert and save the Markdown in the output directory."""
        if output_path is None:
            output_path = self.output_dir / f"{self.pdf_path.stem}.md"
        else:
            output_path = Path(output_path)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        result = self.convert(page_nums, create_debug_images)
        output_path.write_text(result.markdown, encoding="utf-8")

        logger.info("Saved markdown to: %s", output_path)
        return result

    def close(self):
        """Close the PDF document."""
        if self.doc is not None:
            self.doc.close()
            self.doc = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
