"""
Markdown emission from classified blocks.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .base import BaseGenerator
from .syntax import (
    LIST_BREAK,
    escape_heading,
    escape_text,
    format_image,
    format_table_row,
    format_table_separator,
)
from ..errors import EmissionError
from ..models import BlockRole, ClassifiedBlock, TableGrid

logger = logging.getLogger(__name__)


class _State(Enum):
    TEXT = "text"
    LIST = "list"
    TABLE = "table"


class MarkdownEmitter(BaseGenerator):
    """
    Serializes classified blocks into CommonMark-compatible Markdown.

    Walks the blocks as a small state machine: the first table cell after a
    non-table block opens a table, the first list item after a non-list block
    opens a list, and any block of another role, list kind or group closes
    the open one. Top-level blocks are separated by a blank line; two
    adjacent lists of the same kind are separated by an empty HTML comment,
    otherwise CommonMark would merge them into one list.
    """

    def __init__(self, max_heading_level: int = 6):
        self.max_heading_level = max_heading_level

    def emit(self, blocks: Iterable[ClassifiedBlock]) -> str:
        """
        Emit Markdown for one page's blocks.

        Args:
            blocks: Classified blocks in reading order

        Returns:
            Markdown text ending with a newline, or "" when there are no blocks

        Raises:
            EmissionError: If a table grid is malformed or an image path is
                not a relative reference
        """
        chunks: List[Tuple[Optional[BlockRole], str]] = []
        state = _State.TEXT
        group: List[ClassifiedBlock] = []
        group_key: Optional[Tuple] = None

        for block in blocks:
            if block.role is BlockRole.TABLE_CELL:
                key = (BlockRole.TABLE_CELL, block.group_id)
                if state is _State.TABLE and key == group_key:
                    group.append(block)
                    continue
                self._close(state, group, chunks)
                state, group, group_key = _State.TABLE, [block], key
            elif block.role.is_list_item:
                key = (block.role, block.group_id)
                if state is _State.LIST and key == group_key:
                    group.append(block)
                    continue
                self._close(state, group, chunks)
                state, group, group_key = _State.LIST, [block], key
            else:
                self._close(state, group, chunks)
                state, group, group_key = _State.TEXT, [], None
                chunks.append((None, self._render_block(block)))

        self._close(state, group, chunks)
        if not chunks:
            return ""
        return self._join(chunks)

    def _close(
        self,
        state: _State,
        group: List[ClassifiedBlock],
        chunks: List[Tuple[Optional[BlockRole], str]],
    ) -> None:
        if not group:
            return
        if state is _State.TABLE:
            chunks.append((None, self.render_table(TableGrid.from_cells(group))))
        elif state is _State.LIST:
            chunks.append((group[0].role, self.render_list(group)))

    @staticmethod
    def _join(chunks: List[Tuple[Optional[BlockRole], str]]) -> str:
        """Join chunks with blank lines; two lists of one kind in a row get a break between them."""
        parts = []
        previous = None
        for list_role, text in chunks:
            if list_role is not None and list_role is previous:
                parts.append(LIST_BREAK)
            parts.append(text)
            previous = list_role
        return "\n\n".join(parts) + "\n"

    def _render_block(self, block: ClassifiedBlock) -> str:
        if block.role is BlockRole.HEADING:
            level = min(max(block.heading_level or 1, 1), self.max_heading_level)
            return "#" * level + " " + escape_heading(block.text)
        if block.role is BlockRole.IMAGE:
            return self.render_image(block)
        return escape_text(block.text)

    def render_image(self, block: ClassifiedBlock) -> str:
        """
        Render an image block.

        Raises:
            EmissionError: If the block has no image or its path is not relative
        """
        image = block.block.image
        if image is None:
            raise EmissionError("image block without image reference", block.page_number, block.index)
        if not image.is_relative:
            raise EmissionError(
                f"image path {image.path!r} is not a relative reference",
                block.page_number, block.index,
            )
        return format_image(image)

    def render_list(self, items: List[ClassifiedBlock]) -> str:
        """Render one list; ordered numbering increases by 1 from the first item's number."""
        lines = []
        if items[0].role is BlockRole.LIST_ITEM_ORDERED:
            start = items[0].list_number if items[0].list_number is not None else 1
            for offset, item in enumerate(items):
                lines.append(f"{start + offset}. {escape_text(item.text)}")
        else:
            for item in items:
                lines.append(f"- {escape_text(item.text)}")
        return "\n".join(lines)

    def render_table(self, grid: TableGrid) -> str:
        """
        Render a pipe table; the first row is the header.

        Raises:
            EmissionError: If the rows do not share the header's column count
        """
        rows = grid.row_texts()
        for index, row in enumerate(rows):
            if len(row) != grid.column_count:
                raise EmissionError(
                    f"table row {index} has {len(row)} cells, expected {grid.column_count}"
                )

        lines = [format_table_row(rows[0]), format_table_separator(grid.column_count)]
        lines.extend(format_table_row(row) for row in rows[1:])
        logger.debug("Rendered %dx%d table", grid.row_count, grid.column_count)
        return "\n".join(lines)
