"""
Reading-order extraction of positioned blocks.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .base import BaseExtractor
from ..config import ConversionOptions
from ..errors import ExtractionError
from ..models import (
    BlockKind,
    PageObjects,
    PositionedBlock,
    RawImage,
    RawTextRun,
)

logger = logging.getLogger(__name__)

# Gap, as a fraction of the font size, above which merged runs get a space.
_SPACE_GAP_RATIO = 0.15


def normalize_text(text: str) -> str:
    """Collapse internal whitespace and strip the ends."""
    return " ".join(text.split())


class PageLayout:
    """
    Lazy, restartable sequence of blocks for one page.

    Each iteration recomputes the reading order from the page's immutable
    objects, so the sequence can be walked any number of times.
    """

    def __init__(self, page: PageObjects, extractor: "LayoutExtractor"):
        self.page = page
        self._extractor = extractor

    @property
    def page_number(self) -> int:
        return self.page.page_number

    def __iter__(self) -> Iterator[PositionedBlock]:
        return self._extractor.iter_blocks(self.page)

    def __repr__(self) -> str:
        return f"PageLayout(page={self.page.page_number}, objects={len(self.page)})"


class LayoutExtractor(BaseExtractor):
    """
    Orders page objects top-to-bottom, left-to-right and merges text runs.

    Runs whose baselines lie within `line_tolerance` form one line. Inside a
    line, a run merges into its left neighbour when both share the same font
    and the gap between them is at most `merge_gap_ratio` times the font size.
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        """
        Initialize the extractor.

        Args:
            options: Conversion options (defaults are used when omitted)
        """
        self.options = options or ConversionOptions()

    def extract(self, page: PageObjects) -> PageLayout:
        """
        Extract the blocks of a page.

        Args:
            page: Decoded objects of one page

        Returns:
            PageLayout yielding PositionedBlocks in reading order

        Raises:
            ExtractionError: If the page has no non-blank text and no images
        """
        page = self.preprocess(page)
        has_text = any(normalize_text(run.text) for run in page.text_runs)
        if not has_text and not page.images:
            raise ExtractionError(page.page_number)
        logger.debug(
            "Page %d: %d text runs, %d images",
            page.page_number, len(page.text_runs), len(page.images),
        )
        return PageLayout(page, self)

    def iter_blocks(self, page: PageObjects) -> Iterator[PositionedBlock]:
        """Generate the blocks of `page` in reading order."""
        index = 0
        for line in self._group_into_lines(page.objects):
            for item in self._merge_line(line):
                yield self._to_block(item, page.page_number, index)
                index += 1

    def _group_into_lines(
        self, objects: Sequence[Union[RawTextRun, RawImage]]
    ) -> List[List[Union[RawTextRun, RawImage]]]:
        """Cluster objects into lines by baseline, ordered top to bottom."""
        anchored = []
        for obj in objects:
            if isinstance(obj, RawTextRun):
                if not normalize_text(obj.text):
                    continue
                anchored.append((obj.effective_baseline, obj))
            else:
                anchored.append((obj.bbox.y2, obj))

        anchored.sort(key=lambda item: (item[0], item[1].bbox.x))

        lines: List[List[Union[RawTextRun, RawImage]]] = []
        line_anchor = None
        for anchor, obj in anchored:
            if line_anchor is None or anchor - line_anchor > self.options.line_tolerance:
                lines.append([obj])
                line_anchor = anchor
            else:
                lines[-1].append(obj)

        for line in lines:
            line.sort(key=lambda o: o.bbox.x)
        return lines

    def _merge_line(
        self, line: List[Union[RawTextRun, RawImage]]
    ) -> List[Union[RawTextRun, RawImage]]:
        """Merge adjacent same-font runs of one line."""
        merged: List[Union[RawTextRun, RawImage]] = []
        for obj in line:
            previous = merged[-1] if merged else None
            if (isinstance(obj, RawTextRun) and isinstance(previous, RawTextRun)
                    and self._can_merge(previous, obj)):
                merged[-1] = self._join(previous, obj)
            else:
                merged.append(obj)
        return merged

    def _can_merge(self, left: RawTextRun, right: RawTextRun) -> bool:
        if self._font_key(left) != self._font_key(right):
            return False
        gap = left.bbox.horizontal_gap(right.bbox)
        return gap <= self.options.merge_gap_ratio * left.font_size

    @staticmethod
    def _font_key(run: RawTextRun) -> Tuple[str, float, bool]:
        return (run.font_name, round(run.font_size, 1), run.bold)

    @staticmethod
    def _join(left: RawTextRun, right: RawTextRun) -> RawTextRun:
        left_text = normalize_text(left.text)
        right_text = normalize_text(right.text)
        gap = left.bbox.horizontal_gap(right.bbox)
        separator = " " if gap > _SPACE_GAP_RATIO * left.font_size else ""
        return RawTextRun(
            bbox=left.bbox.merge_with(right.bbox),
            text=left_text + separator + right_text,
            font_size=left.font_size,
            font_name=left.font_name,
            bold=left.bold,
            baseline=left.baseline,
        )

    @staticmethod
    def _to_block(item: Union[RawTextRun, RawImage], page_number: int, index: int) -> PositionedBlock:
        if isinstance(item, RawImage):
            return PositionedBlock(
                bbox=item.bbox,
                kind=BlockKind.IMAGE,
                image=item.image,
                page_number=page_number,
                index=index,
            )
        return PositionedBlock(
            bbox=item.bbox,
            kind=BlockKind.TEXT,
            text=normalize_text(item.text),
            font_size=item.font_size,
            font_name=item.font_name,
            bold=item.bold,
            page_number=page_number,
            index=index,
        )
