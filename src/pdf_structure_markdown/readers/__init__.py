"""
Readers turning other formats back into page objects.
"""

from .markdown_reader import MarkdownReader

__all__ = ["MarkdownReader"]
