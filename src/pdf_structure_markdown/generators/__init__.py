"""
Markdown generation components.
"""

from .base import BaseGenerator
from .markdown_emitter import MarkdownEmitter

__all__ = ["BaseGenerator", "MarkdownEmitter"]
