"""
Heading detection from relative font sizes.
"""

from typing import Dict, List, Optional, Sequence, Set
import numpy as np

from .base import BaseDetector, Detection
from ..config import ConversionOptions
from ..models import BlockRole, ClassifiedBlock, PositionedBlock

# Sizes closer than this (points) share a heading level.
SIZE_CLUSTER_THRESHOLD = 0.5


class HeadingDetector(BaseDetector):
    """
    Claims text noticeably larger than the page's body text.

    The body size is the character-weighted mode of the page's font sizes,
    capped at `max_body_font_size`. Heading levels follow the rank of the
    distinct heading sizes on the page, largest first.
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()

    def body_font_size(self, blocks: Sequence[PositionedBlock]) -> Optional[float]:
        """
        Estimate the body font size of a page.

        Args:
            blocks: Page blocks

        Returns:
            Body size in points, or None when the page has no text
        """
        text_blocks = [b for b in blocks if b.is_text and b.font_size]
        if not text_blocks:
            return None

        sizes = np.round(np.array([b.font_size for b in text_blocks]) * 2) / 2
        weights = np.array([max(b.char_count, 1) for b in text_blocks], dtype=float)
        unique, inverse = np.unique(sizes, return_inverse=True)
        totals = np.bincount(inverse, weights=weights)
        # Ties go to the smaller size: np.unique sorts ascending and argmax takes the first.
        body = float(unique[int(np.argmax(totals))])

        if self.options.max_body_font_size is not None:
            body = min(body, self.options.max_body_font_size)
        return body

    def detect(
        self,
        blocks: Sequence[PositionedBlock],
        claimed: Dict[int, ClassifiedBlock],
        skipped: Set[int],
    ) -> Detection:
        detection = Detection()
        body = self.body_font_size(blocks)
        if body is None:
            return detection

        threshold = body * self.options.heading_size_ratio - 1e-6
        candidates: List[int] = []
        for pos, block in enumerate(blocks):
            if pos in claimed or pos in skipped or not block.is_text:
                continue
            if not block.font_size or block.font_size < threshold:
                continue
            if len(block.text) > self.options.max_heading_chars:
                detection.ambiguities.append(self.ambiguity(
                    block,
                    f"heading-sized text is {len(block.text)} characters long",
                ))
                detection.assignments[pos] = ClassifiedBlock(block=block, role=BlockRole.PARAGRAPH)
                continue
            candidates.append(pos)

        if not candidates:
            return detection

        levels = self.cluster_positions(
            [blocks[pos].font_size for pos in candidates], SIZE_CLUSTER_THRESHOLD
        )
        levels.sort(reverse=True)

        for pos in candidates:
            block = blocks[pos]
            rank = min(range(len(levels)), key=lambda i: abs(levels[i] - block.font_size))
            detection.assignments[pos] = ClassifiedBlock(
                block=block,
                role=BlockRole.HEADING,
                heading_level=min(rank + 1, self.options.max_heading_level),
            )
        return detection
