"""
Layout extraction components.
"""

from .base import BaseExtractor
from .layout_extractor import LayoutExtractor, PageLayout, normalize_text
from .pymupdf_source import PyMuPDFPageSource

__all__ = ["BaseExtractor", "LayoutExtractor", "PageLayout", "PyMuPDFPageSource", "normalize_text"]
