"""
Table detection from row bands and column alignment.
"""

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set

from .base import BaseDetector, Detection
from ..config import ConversionOptions
from ..models import BlockRole, BoundingBox, ClassifiedBlock, PositionedBlock


@dataclass
class RowBand:
    """Blocks sharing a horizontal band of the page, left to right."""
    positions: List[int] = field(default_factory=list)
    blocks: List[PositionedBlock] = field(default_factory=list)
    bbox: Optional[BoundingBox] = None

    def add(self, pos: int, block: PositionedBlock) -> None:
        self.positions.append(pos)
        self.blocks.append(block)
        self.bbox = block.bbox if self.bbox is None else self.bbox.merge_with(block.bbox)

    def __len__(self) -> int:
        return len(self.blocks)


@dataclass
class DetectedTable:
    """Rows of aligned bands with the column spans they define."""
    rows: List[RowBand] = field(default_factory=list)
    columns: List[BoundingBox] = field(default_factory=list)
    pending_reason: Optional[str] = None

    @property
    def column_count(self) -> int:
        return len(self.columns)


class TableDetector(BaseDetector):
    """
    Detects tables as runs of aligned row bands.

    A row band groups consecutive blocks whose vertical extents overlap. A
    table is at least `min_table_rows` consecutive bands with the same number
    of blocks (at least `min_table_columns`) where the i-th block of every
    band overlaps the i-th column span of the table horizontally. Neighbouring
    blocks of a row must be separated by a gutter of at least
    `merge_gap_ratio` times their font size, so runs of one line that only
    differ in font do not form columns.
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        group_ids: Optional[Iterator[int]] = None,
    ):
        """
        Initialize the table detector.

        Args:
            options: Conversion options
            group_ids: Shared source of list/table group ids
        """
        self.options = options or ConversionOptions()
        self.group_ids = group_ids if group_ids is not None else itertools.count()

    def group_into_bands(
        self, blocks: Sequence[PositionedBlock], skipped: Set[int]
    ) -> List[RowBand]:
        """
        Group blocks into row bands, preserving reading order.

        Args:
            blocks: Page blocks in reading order
            skipped: Positions to leave out

        Returns:
            Row bands, top to bottom
        """
        bands: List[RowBand] = []
        for pos, block in enumerate(blocks):
            if pos in skipped:
                continue
            current = bands[-1] if bands else None
            if (current is not None
                    and block.bbox.x >= current.blocks[-1].bbox.x
                    and current.bbox.contains_point(current.bbox.x, block.bbox.center_y)):
                current.add(pos, block)
            else:
                band = RowBand()
                band.add(pos, block)
                bands.append(band)
        return bands

    def find_tables(
        self,
        blocks: Sequence[PositionedBlock],
        claimed: Dict[int, ClassifiedBlock],
        skipped: Set[int],
        detection: Optional[Detection] = None,
    ) -> List[DetectedTable]:
        """
        Find aligned runs of row bands.

        Args:
            blocks: Page blocks in reading order
            claimed: Blocks already classified by earlier rules
            skipped: Positions absorbed into other blocks
            detection: Receives ambiguity diagnostics when given

        Returns:
            Detected tables, top to bottom
        """
        tables: List[DetectedTable] = []
        current: Optional[DetectedTable] = None

        for band in self.group_into_bands(blocks, skipped):
            blocked = any(pos in claimed for pos in band.positions)
            eligible = (
                len(band) >= self.options.min_table_columns
                and all(b.is_text for b in band.blocks)
                and self._has_gutters(band)
            )

            if current is not None and eligible and self._aligned(current, band):
                if blocked:
                    self._report(detection, band, claimed,
                                 "table row contains a heading or list item")
                    current = self._close(current, tables, claimed, detection)
                    continue
                self._extend(current, band)
                continue

            reason = None
            if current is not None and eligible and not blocked and self._partially_aligned(current, band):
                reason = f"row of {len(band)} cells next to a {current.column_count}-column table"

            current = self._close(current, tables, claimed, detection)
            if eligible and not blocked:
                current = DetectedTable(pending_reason=reason)
                self._extend(current, band)

        self._close(current, tables, claimed, detection)
        return tables

    def detect(
        self,
        blocks: Sequence[PositionedBlock],
        claimed: Dict[int, ClassifiedBlock],
        skipped: Set[int],
    ) -> Detection:
        detection = Detection()
        for table in self.find_tables(blocks, claimed, skipped, detection):
            group = next(self.group_ids)
            for row_index, band in enumerate(table.rows):
                for col_index, (pos, block) in enumerate(zip(band.positions, band.blocks)):
                    detection.assignments[pos] = ClassifiedBlock(
                        block=block,
                        role=BlockRole.TABLE_CELL,
                        table_row=row_index,
                        table_column=col_index,
                        group_id=group,
                    )
        return detection

    def _has_gutters(self, band: RowBand) -> bool:
        """Whether every pair of neighbouring blocks is separated by a column gutter."""
        for left, right in zip(band.blocks, band.blocks[1:]):
            size = max(left.font_size or 0.0, right.font_size or 0.0)
            if right.bbox.x - left.bbox.x2 < self.options.merge_gap_ratio * size:
                return False
        return True

    def _aligned(self, table: DetectedTable, band: RowBand) -> bool:
        if len(band) != table.column_count:
            return False
        tolerance = self.options.column_tolerance
        return all(
            block.bbox.overlaps_horizontally(column, tolerance)
            for block, column in zip(band.blocks, table.columns)
        )

    def _partially_aligned(self, table: DetectedTable, band: RowBand) -> bool:
        """Whether a band of a different width shares column boundaries with the table."""
        if len(band) == table.column_count:
            return False
        tolerance = self.options.column_tolerance
        matches = sum(
            1 for block in band.blocks
            if any(block.bbox.overlaps_horizontally(col, tolerance) for col in table.columns)
        )
        return matches >= self.options.min_table_columns

    @staticmethod
    def _extend(table: DetectedTable, band: RowBand) -> None:
        table.rows.append(band)
        if not table.columns:
            table.columns = [block.bbox for block in band.blocks]
        else:
            table.columns = [
                column.merge_with(block.bbox) for column, block in zip(table.columns, band.blocks)
            ]

    def _close(
        self,
        table: Optional[DetectedTable],
        tables: List[DetectedTable],
        claimed: Dict[int, ClassifiedBlock],
        detection: Optional[Detection],
    ) -> None:
        """Keep a finished run if it is tall enough; otherwise report why its first row was suspicious."""
        if table is None:
            return None
        if len(table.rows) >= self.options.min_table_rows:
            tables.append(table)
        elif table.pending_reason:
            self._report(detection, table.rows[0], claimed, table.pending_reason)
        return None

    def _report(
        self,
        detection: Optional[Detection],
        band: RowBand,
        claimed: Dict[int, ClassifiedBlock],
        reason: str,
    ) -> None:
        """Record an ambiguity for the band's unclaimed blocks, which stay paragraphs."""
        if detection is None:
            return
        for pos, block in zip(band.positions, band.blocks):
            if pos in claimed:
                continue
            detection.ambiguities.append(self.ambiguity(block, reason))
            detection.assignments[pos] = ClassifiedBlock(block=block, role=BlockRole.PARAGRAPH)
