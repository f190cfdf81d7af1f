"""
Error types raised by the conversion pipeline.

Every error carries the page (and, where it applies, block) context it was
raised for, so that callers can report it without re-deriving where it came
from.
"""

from typing import Optional


class StructureMarkdownError(Exception):
    """Base class for all pipeline errors."""


class ExtractionError(StructureMarkdownError):
    """
    A page could not be turned into positioned blocks.

    Surfaced per page; conversion of the remaining pages continues.
    """

    def __init__(self, page_number: int, reason: str = "no extractable objects"):
        self.page_number = page_number
        self.reason = reason
        super().__init__(f"Failed to extract page {page_number}: {reason}")


class ClassificationAmbiguity(StructureMarkdownError):
    """
    A block matched contradictory structure rules.

    Diagnostic only: the classifier records it and falls back to a paragraph.
    """

    def __init__(self, page_number: int, block_index: int, reason: str):
        self.page_number = page_number
        self.block_index = block_index
        self.reason = reason
        super().__init__(
            f"Ambiguous block {block_index} on page {page_number}: {reason}"
        )


class EmissionError(StructureMarkdownError):
    """
    Classified blocks cannot be written as valid Markdown.

    Aborts emission of the whole document.
    """

    def __init__(
        self,
        reason: str,
        page_number: Optional[int] = None,
        block_index: Optional[int] = None,
    ):
        self.reason = reason
        self.page_number = page_number
        self.block_index = block_index

        message = "Failed to emit Markdown"
        if page_number is not None:
            message += f" on page {page_number}"
        if block_index is not None:
            message += f" at block {block_index}"
        super().__init__(f"{message}: {reason}")


__all__ = [
    "StructureMarkdownError",
    "ExtractionError",
    "ClassificationAmbiguity",
    "EmissionError",
]
