"""
Typesets Markdown back into page objects.

The reader lays out each Markdown line the way a simple PDF writer would:
headings as larger bold runs, table rows as runs at fixed column offsets,
images as placed image objects. Feeding the result through the extractor and
classifier reproduces the classification the Markdown was emitted from.
"""

import logging
from typing import List, Optional

from ..config import ConversionOptions
from ..generators.syntax import (
    LIST_BREAK,
    ORDERED_ITEM_PATTERN,
    TABLE_SEPARATOR_PATTERN,
    UNORDERED_ITEM_PATTERN,
    parse_heading,
    parse_image,
    split_table_row,
    unescape_text,
)
from ..models import BoundingBox, PageObjects, RawImage, RawObject, RawTextRun

logger = logging.getLogger(__name__)

LEFT_MARGIN = 72.0
TOP_MARGIN = 72.0
PAGE_WIDTH = 612.0
COLUMN_WIDTH = 160.0
COLUMN_PADDING = 20.0
LINE_SPACING = 1.5
CHAR_WIDTH_RATIO = 0.5
IMAGE_SIZE = (200.0, 150.0)


class MarkdownReader:
    """
    Converts Markdown text into PageObjects, one per page.

    Pages are split on the configured page separator.
    """

    def __init__(self, options: Optional[ConversionOptions] = None, body_font_size: float = 12.0):
        """
        Initialize the reader.

        Args:
            options: Conversion options (page separator and heading thresholds)
            body_font_size: Font size used for body text
        """
        self.options = options or ConversionOptions()
        self.body_font_size = body_font_size

    def heading_size(self, level: int) -> float:
        """Font size for a heading level; every level clears the heading threshold."""
        reference = max(self.options.max_body_font_size or self.body_font_size, self.body_font_size)
        return reference * self.options.heading_size_ratio * (1.25 + 0.25 * (6 - level))

    def read(self, text: str) -> List[PageObjects]:
        """
        Typeset a Markdown document.

        Args:
            text: Markdown text

        Returns:
            One PageObjects per page, numbered from 1
        """
        chunks = text.split(self.options.page_separator)
        pages = [self.read_page(chunk, number) for number, chunk in enumerate(chunks, start=1)]
        logger.debug("Read %d pages of Markdown", len(pages))
        return pages

    def read_page(self, text: str, page_number: int = 1) -> PageObjects:
        """
        Typeset one page of Markdown.

        Args:
            text: Markdown for a single page
            page_number: Number assigned to the page

        Returns:
            PageObjects for the page
        """
        objects: List[RawObject] = []
        lines = text.splitlines()
        y = TOP_MARGIN
        i = 0

        while i < len(lines):
            line = lines[i].rstrip()
            if not line.strip() or line.strip() == LIST_BREAK:
                i += 1
                continue

            if line.startswith("|") and i + 1 < len(lines) and TABLE_SEPARATOR_PATTERN.match(lines[i + 1].strip()):
                rows = [split_table_row(line)]
                i += 2
                while i < len(lines) and lines[i].startswith("|"):
                    rows.append(split_table_row(lines[i].rstrip()))
                    i += 1
                for row in rows:
                    y = self._place_row(objects, row, y)
                continue

            heading = parse_heading(line)
            image = parse_image(line)
            if heading is not None:
                level, content = heading
                y = self._place_text(objects, content, y, self.heading_size(level), bold=True)
            elif image is not None:
                width, height = IMAGE_SIZE
                objects.append(RawImage(bbox=BoundingBox(LEFT_MARGIN, y, width, height), image=image))
                y += height + self.body_font_size * LINE_SPACING
            elif ORDERED_ITEM_PATTERN.match(line):
                match = ORDERED_ITEM_PATTERN.match(line)
                content = f"{match.group(1)}. {unescape_text(match.group(2))}"
                y = self._place_text(objects, content, y, self.body_font_size)
            elif UNORDERED_ITEM_PATTERN.match(line):
                match = UNORDERED_ITEM_PATTERN.match(line)
                content = f"- {unescape_text(match.group(1))}"
                y = self._place_text(objects, content, y, self.body_font_size)
            else:
                y = self._place_text(objects, unescape_text(line.strip()), y, self.body_font_size)
            i += 1

        return PageObjects(
            page_number=page_number,
            objects=objects,
            width=PAGE_WIDTH,
            height=y + TOP_MARGIN,
        )

    def _place_text(
        self,
        objects: List[RawObject],
        text: str,
        y: float,
        size: float,
        x: float = LEFT_MARGIN,
        max_width: Optional[float] = None,
        bold: bool = False,
    ) -> float:
        width = len(text) * size * CHAR_WIDTH_RATIO
        if max_width is not None:
            width = min(width, max_width)
        objects.append(RawTextRun(
            bbox=BoundingBox(x, y, width, size),
            text=text,
            font_size=size,
            font_name="Helvetica-Bold" if bold else "Helvetica",
            bold=bold,
            baseline=y + size * 0.8,
        ))
        return y + size * LINE_SPACING

    def _place_row(self, objects: List[RawObject], cells: List[str], y: float) -> float:
        size = self.body_font_size
        for column, cell in enumerate(cells):
            if not cell:
                continue
            self._place_text(
                objects, cell, y, size,
                x=LEFT_MARGIN + column * COLUMN_WIDTH,
                max_width=COLUMN_WIDTH - COLUMN_PADDING,
            )
        return y + size * LINE_SPACING
