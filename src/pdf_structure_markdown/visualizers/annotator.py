"""
Page annotation for debug visualization.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple
import cv2
import numpy as np

from ..models import BlockRole, ClassifiedBlock

logger = logging.getLogger(__name__)


class PageAnnotator:
    """Creates annotated images showing how each block was classified."""

    # Default colors (BGR format)
    COLORS: Dict[BlockRole, Tuple[int, int, int]] = {
        BlockRole.HEADING: (255, 0, 0),               # Blue
        BlockRole.PARAGRAPH: (128, 128, 128),         # Gray
        BlockRole.LIST_ITEM_ORDERED: (0, 165, 255),   # Orange
        BlockRole.LIST_ITEM_UNORDERED: (0, 215, 255), # Gold
        BlockRole.TABLE_CELL: (0, 255, 0),            # Green
        BlockRole.IMAGE: (255, 0, 255),               # Magenta
    }

    def __init__(self, colors: Optional[Dict[BlockRole, Tuple[int, int, int]]] = None, show_labels: bool = True):
        self.colors = {**self.COLORS, **(colors or {})}
        self.show_labels = show_labels

    def annotate(
        self,
        image: np.ndarray,
        blocks: Iterable[ClassifiedBlock],
        scale: float = 1.0,
    ) -> np.ndarray:
        """
        Draw classified block boxes on a copy of the page image.

        Args:
            image: Rendered page (BGR)
            blocks: Classified blocks of the page
            scale: Factor from PDF points to image pixels

        Returns:
            Annotated copy of the image
        """
        annotated = image.copy()
        for block in blocks:
            box = block.block.bbox.scaled(scale)
            color = self.colors[block.role]
            top_left = (int(box.x), int(box.y))
            bottom_right = (int(round(box.x2)), int(round(box.y2)))
            thickness = 2 if block.role is BlockRole.HEADING else 1
            cv2.rectangle(annotated, top_left, bottom_right, color, thickness)
            if self.show_labels:
                cv2.putText(
                    annotated, self._label(block), (top_left[0], max(top_left[1] - 2, 10)),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.35, color, 1,
                )
        return annotated

    @staticmethod
    def _label(block: ClassifiedBlock) -> str:
        if block.role is BlockRole.HEADING:
            return f"h{block.heading_level}"
        if block.role is BlockRole.TABLE_CELL:
            return f"r{block.table_row}c{block.table_column}"
        return block.role.value

    def save(self, image: np.ndarray, path: str) -> None:
        """Save annotated image to file."""
        if not cv2.imwrite(path, image):
            raise OSError(f"Could not write annotated image to {path}")
        logger.info("Annotated image saved: %s", path)
