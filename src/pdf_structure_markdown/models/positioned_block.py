"""
PositionedBlock model for extracted visual units.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from .bbox import BoundingBox
from .image_reference import ImageReference


class BlockKind(Enum):
    """Kind of visual unit."""

    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class PositionedBlock:
    """
    A single visually-located content unit extracted from a page.

    Attributes:
        bbox: Bounding box on the page
        kind: Text run or image
        text: Text content (text blocks only)
        image: Image reference (image blocks only)
        font_size: Font size in points (text blocks only)
        font_name: Font name (text blocks only)
        bold: Whether the font is bold (text blocks only)
        page_number: 1-based page the block came from
        index: Position of the block in reading order
    """
    bbox: BoundingBox
    kind: BlockKind
    text: Optional[str] = None
    image: Optional[ImageReference] = None
    font_size: Optional[float] = None
    font_name: str = ""
    bold: bool = False
    page_number: int = 1
    index: int = 0

    def __post_init__(self):
        if self.kind is BlockKind.TEXT and self.text is None:
            raise ValueError("Text blocks require text")
        if self.kind is BlockKind.IMAGE and self.image is None:
            raise ValueError("Image blocks require an image reference")

    @property
    def is_text(self) -> bool:
        return self.kind is BlockKind.TEXT

    @property
    def is_image(self) -> bool:
        return self.kind is BlockKind.IMAGE

    @property
    def char_count(self) -> int:
        return len(self.text) if self.text else 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "bbox": self.bbox.to_dict(),
            "kind": self.kind.value,
            "text": self.text,
            "image": self.image.to_dict() if self.image else None,
            "font_size": self.font_size,
            "font_name": self.font_name,
            "bold": self.bold,
            "page_number": self.page_number,
            "index": self.index,
        }

    def __repr__(self) -> str:
        if self.is_image:
            return f"PositionedBlock(page={self.page_number}, index={self.index}, image='{self.image.path}')"
        text = self.text if len(self.text) <= 20 else self.text[:20] + "..."
        return f"PositionedBlock(page={self.page_number}, index={self.index}, text='{text}')"
