"""
TableGrid model: table cells arranged by row and column.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .classified_block import BlockRole, ClassifiedBlock
from ..errors import EmissionError


@dataclass
class TableGrid:
    """
    Row/column-aligned collection of table-cell blocks.

    Every cell occupies exactly one (row, column) slot. Rows are ordered
    top-to-bottom and columns left-to-right; the first row is the header.

    Attributes:
        cells: Mapping of (row, column) to the cell occupying it
        row_count: Number of rows
        column_count: Number of columns (the widest row)
    """
    cells: Dict[Tuple[int, int], ClassifiedBlock] = field(default_factory=dict)
    row_count: int = 0
    column_count: int = 0

    @classmethod
    def from_cells(cls, blocks: Sequence[ClassifiedBlock]) -> "TableGrid":
        """
        Build a grid from table-cell blocks.

        Args:
            blocks: Cells of one table, in any order

        Returns:
            The assembled TableGrid

        Raises:
            EmissionError: If a block is not a table cell, lacks a row/column,
                or two blocks claim the same slot
        """
        if not blocks:
            raise EmissionError("table has no cells")

        cells: Dict[Tuple[int, int], ClassifiedBlock] = {}
        for block in blocks:
            if block.role is not BlockRole.TABLE_CELL:
                raise EmissionError(
                    f"{block.role.value} block inside table",
                    block.page_number, block.index,
                )
            if block.table_row is None or block.table_column is None:
                raise EmissionError(
                    "table cell without row/column position",
                    block.page_number, block.index,
                )
            if block.table_row < 0 or block.table_column < 0:
                raise EmissionError(
                    f"negative table position ({block.table_row}, {block.table_column})",
                    block.page_number, block.index,
                )
            slot = (block.table_row, block.table_column)
            if slot in cells:
                raise EmissionError(
                    f"two cells share row {slot[0]}, column {slot[1]}",
                    block.page_number, block.index,
                )
            cells[slot] = block

        row_ids = sorted({row for row, _ in cells})
        col_ids = sorted({col for _, col in cells})
        # Compact sparse indices so rows and columns are contiguous from 0.
        row_map = {row: i for i, row in enumerate(row_ids)}
        col_map = {col: i for i, col in enumerate(col_ids)}
        compact = {(row_map[r], col_map[c]): cell for (r, c), cell in cells.items()}

        return cls(cells=compact, row_count=len(row_ids), column_count=len(col_ids))

    def row_texts(self) -> List[List[str]]:
        """Cell texts row by row, padded to the column count."""
        rows = []
        for row in range(self.row_count):
            rows.append([
                self.cells[(row, col)].text if (row, col) in self.cells else ""
                for col in range(self.column_count)
            ])
        return rows

    def __len__(self) -> int:
        return len(self.cells)
