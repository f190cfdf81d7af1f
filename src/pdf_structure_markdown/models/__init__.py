"""
Data models for layout reconstruction.
"""

from .bbox import BoundingBox
from .image_reference import ImageReference
from .page_objects import RawTextRun, RawImage, RawObject, PageObjects
from .positioned_block import BlockKind, PositionedBlock
from .classified_block import BlockRole, ClassifiedBlock
from .table_grid import TableGrid

__all__ = [
    "BoundingBox",
    "ImageReference",
    "RawTextRun",
    "RawImage",
    "RawObject",
    "PageObjects",
    "BlockKind",
    "PositionedBlock",
    "BlockRole",
    "ClassifiedBlock",
    "TableGrid",
]
