"""
PDF page rendering.
"""

from .page_renderer import PageRenderer

__all__ = ["PageRenderer"]
