"""
Bounding box model for positioned page content.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box in PDF points, origin at the top-left of the page.

    Attributes:
        x: Left coordinate
        y: Top coordinate
        width: Width of the box
        height: Height of the box
    """
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0:
            raise ValueError(f"Width must be non-negative, got {self.width}")
        if self.height < 0:
            raise ValueError(f"Height must be non-negative, got {self.height}")

    @classmethod
    def from_corners(cls, x0: float, y0: float, x1: float, y1: float) -> "BoundingBox":
        """Create a box from (x0, y0, x1, y1) corners, as PyMuPDF reports them."""
        return cls(
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )

    @property
    def x2(self) -> float:
        """Right coordinate of the box."""
        return self.x + self.width

    @property
    def y2(self) -> float:
        """Bottom coordinate of the box."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """X coordinate of the center point."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Y coordinate of the center point."""
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        """Area of the box."""
        return self.width * self.height

    def horizontal_overlap(self, other: "BoundingBox") -> float:
        """Length of the shared horizontal span (0 when disjoint)."""
        return max(0.0, min(self.x2, other.x2) - max(self.x, other.x))

    def vertical_overlap(self, other: "BoundingBox") -> float:
        """Length of the shared vertical span (0 when disjoint)."""
        return max(0.0, min(self.y2, other.y2) - max(self.y, other.y))

    def horizontal_gap(self, other: "BoundingBox") -> float:
        """
        Distance between the facing vertical edges.

        Negative when the boxes overlap horizontally.
        """
        return max(self.x, other.x) - min(self.x2, other.x2)

    def overlaps_horizontally(self, other: "BoundingBox", tolerance: float = 0.0) -> bool:
        """Check if the horizontal spans intersect, allowing `tolerance` points of slack."""
        return self.horizontal_gap(other) <= tolerance

    def overlaps_vertically(self, other: "BoundingBox", tolerance: float = 0.0) -> bool:
        """Check if the vertical spans intersect, allowing `tolerance` points of slack."""
        return max(self.y, other.y) - min(self.y2, other.y2) <= tolerance

    def contains_point(self, px: float, py: float, margin: float = 0.0) -> bool:
        """Check if a point is within this box."""
        return (self.x - margin <= px <= self.x2 + margin and
                self.y - margin <= py <= self.y2 + margin)

    def merge_with(self, other: "BoundingBox") -> "BoundingBox":
        """
        Create a new box that encompasses both boxes.

        Args:
            other: Another BoundingBox to merge with

        Returns:
            New BoundingBox covering both
        """
        min_x = min(self.x, other.x)
        min_y = min(self.y, other.y)
        max_x = max(self.x2, other.x2)
        max_y = max(self.y2, other.y2)

        return BoundingBox(
            x=min_x,
            y=min_y,
            width=max_x - min_x,
            height=max_y - min_y,
        )

    def scaled(self, factor: float) -> "BoundingBox":
        """Return the box scaled by `factor`, e.g. points to rendered pixels."""
        return BoundingBox(
            x=self.x * factor,
            y=self.y * factor,
            width=self.width * factor,
            height=self.height * factor,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    def __repr__(self) -> str:
        return f"BoundingBox(x={self.x:g}, y={self.y:g}, w={self.width:g}, h={self.height:g})"
