"""
Debug visualization of classified pages.
"""

from .annotator import PageAnnotator

__all__ = ["PageAnnotator"]
