"""
Decoded page objects handed to the layout extractor.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .bbox import BoundingBox
from .image_reference import ImageReference


@dataclass(frozen=True)
class RawTextRun:
    """
    One run of text as decoded from the content stream.

    Attributes:
        bbox: Bounding box of the run
        text: Decoded text
        font_size: Font size in points
        font_name: Font name as reported by the decoder
        bold: Whether the font is bold
        baseline: Baseline y coordinate; the box bottom is used when unknown
    """
    bbox: BoundingBox
    text: str
    font_size: float = 12.0
    font_name: str = ""
    bold: bool = False
    baseline: Optional[float] = None

    @property
    def effective_baseline(self) -> float:
        return self.baseline if self.baseline is not None else self.bbox.y2


@dataclass(frozen=True)
class RawImage:
    """An image object placed on the page."""
    bbox: BoundingBox
    image: ImageReference


RawObject = Union[RawTextRun, RawImage]


@dataclass(frozen=True)
class PageObjects:
    """
    All decoded objects of one page, in content-stream order.

    Attributes:
        page_number: 1-based page number
        objects: Text runs and images
        width: Page width in points
        height: Page height in points
    """
    page_number: int
    objects: Tuple[RawObject, ...] = field(default_factory=tuple)
    width: float = 612.0
    height: float = 792.0

    def __post_init__(self):
        # Accept any iterable but store a tuple so the page stays immutable.
        object.__setattr__(self, "objects", tuple(self.objects))

    @property
    def text_runs(self) -> Tuple[RawTextRun, ...]:
        return tuple(o for o in self.objects if isinstance(o, RawTextRun))

    @property
    def images(self) -> Tuple[RawImage, ...]:
        return tuple(o for o in self.objects if isinstance(o, RawImage))

    def __len__(self) -> int:
        return len(self.objects)
