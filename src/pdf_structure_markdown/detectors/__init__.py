"""
Structure detectors for headings, lists and tables.
"""

from .base import BaseDetector, Detection
from .heading_detector import HeadingDetector
from .list_detector import ListDetector
from .table_detector import TableDetector, DetectedTable, RowBand

__all__ = [
    "BaseDetector",
    "Detection",
    "HeadingDetector",
    "ListDetector",
    "TableDetector",
    "DetectedTable",
    "RowBand",
]
