"""
ClassifiedBlock model: a positioned block with a semantic Markdown role.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Any

from .positioned_block import PositionedBlock


class BlockRole(Enum):
    """Semantic role assigned by the structure classifier."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM_ORDERED = "list-item-ordered"
    LIST_ITEM_UNORDERED = "list-item-unordered"
    TABLE_CELL = "table-cell"
    IMAGE = "image"

    @property
    def is_list_item(self) -> bool:
        return self in (BlockRole.LIST_ITEM_ORDERED, BlockRole.LIST_ITEM_UNORDERED)


@dataclass(frozen=True)
class ClassifiedBlock:
    """
    A PositionedBlock annotated with its role.

    Attributes:
        block: The underlying positioned block
        role: Assigned semantic role
        heading_level: 1-6 for headings
        list_number: Declared number for ordered list items
        list_text: Item text with the list marker stripped
        table_row: Row index inside the table (table cells)
        table_column: Column index inside the table (table cells)
        group_id: Identifies the list or table the block belongs to
    """
    block: PositionedBlock
    role: BlockRole
    heading_level: Optional[int] = None
    list_number: Optional[int] = None
    list_text: Optional[str] = None
    table_row: Optional[int] = None
    table_column: Optional[int] = None
    group_id: Optional[int] = None

    @property
    def text(self) -> str:
        """Text the emitter writes for this block."""
        if self.role.is_list_item and self.list_text is not None:
            return self.list_text
        return self.block.text or ""

    @property
    def page_number(self) -> int:
        return self.block.page_number

    @property
    def index(self) -> int:
        return self.block.index

    def with_role(self, role: BlockRole, **changes: Any) -> "ClassifiedBlock":
        """Return a re-classified copy; role-specific fields not given are cleared."""
        cleared = dict(
            heading_level=None,
            list_number=None,
            list_text=None,
            table_row=None,
            table_column=None,
            group_id=None,
        )
        cleared.update(changes)
        return replace(self, role=role, **cleared)

    def signature(self) -> Tuple[Any, ...]:
        """
        Geometry-free identity of the classification.

        Two classifications of the same structure compare equal even when
        the blocks were laid out at different positions.
        """
        image = None
        if self.block.image is not None:
            image = (self.block.image.path, self.block.image.resolved_alt, self.block.image.title)
        return (
            self.role,
            self.heading_level,
            self.list_number if self.role is BlockRole.LIST_ITEM_ORDERED else None,
            self.text,
            self.table_row,
            self.table_column,
            image,
        )

    def __repr__(self) -> str:
        return f"ClassifiedBlock(role={self.role.value}, block={self.block!r})"
