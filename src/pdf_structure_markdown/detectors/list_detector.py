"""
List item detection from leading markers.
"""

import itertools
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Set

from .base import BaseDetector, Detection
from ..models import BlockKind, BlockRole, ClassifiedBlock, PositionedBlock

BULLET_GLYPHS = "-*•●○◦▪‣–"
BULLET_PATTERN = re.compile(r"^([" + re.escape(BULLET_GLYPHS) + r"])(?:\s+(.*))?$")
NUMBER_PATTERN = re.compile(r"^(?:\((\d{1,3})\)|(\d{1,3})[.)])(?:\s+(.*))?$")


@dataclass
class _ListCandidate:
    position: int
    block: PositionedBlock
    number: Optional[int]
    body: str


class ListDetector(BaseDetector):
    """
    Claims blocks starting with a bullet glyph or a numeral.

    Consecutive numeral items numbered n, n+1, ... form one ordered list. An
    item numbered 1, or one whose successor continues its numbering, starts a
    new ordered list. Other numeral items become unordered items that keep
    their numeral in the text.
    """

    def __init__(self, group_ids: Optional[Iterator[int]] = None):
        """
        Initialize the detector.

        Args:
            group_ids: Shared source of list/table group ids
        """
        self.group_ids = group_ids if group_ids is not None else itertools.count()

    @staticmethod
    def parse_marker(text: str):
        """
        Split a leading list marker from its text.

        Args:
            text: Block text

        Returns:
            (number, body) where number is None for bullets, or None when the
            text has no marker. `body` is empty for a bare marker.
        """
        match = NUMBER_PATTERN.match(text)
        if match:
            number = int(match.group(1) or match.group(2))
            return number, (match.group(3) or "").strip()
        match = BULLET_PATTERN.match(text)
        if match:
            return None, (match.group(2) or "").strip()
        return None

    def detect(
        self,
        blocks: Sequence[PositionedBlock],
        claimed: Dict[int, ClassifiedBlock],
        skipped: Set[int],
    ) -> Detection:
        detection = Detection()
        candidates: List[_ListCandidate] = []

        for pos, block in enumerate(blocks):
            if pos in claimed or pos in skipped or pos in detection.absorbed or not block.is_text:
                continue
            parsed = self.parse_marker(block.text)
            if parsed is None:
                continue
            number, body = parsed

            if not body:
                follower = self._marker_follower(blocks, pos, claimed, skipped)
                if follower is None:
                    detection.ambiguities.append(self.ambiguity(block, "list marker without item text"))
                    detection.assignments[pos] = ClassifiedBlock(block=block, role=BlockRole.PARAGRAPH)
                    continue
                detection.absorbed.add(follower)
                block = self._absorb(block, blocks[follower])
                body = blocks[follower].text

            candidates.append(_ListCandidate(pos, block, number, body))

        self._assign(candidates, blocks, skipped | detection.absorbed, detection)
        return detection

    @staticmethod
    def _marker_follower(
        blocks: Sequence[PositionedBlock],
        pos: int,
        claimed: Dict[int, ClassifiedBlock],
        skipped: Set[int],
    ) -> Optional[int]:
        """Position of the text block that continues a bare marker on the same line."""
        nxt = pos + 1
        if nxt >= len(blocks) or nxt in claimed or nxt in skipped:
            return None
        marker, follower = blocks[pos], blocks[nxt]
        if not follower.is_text:
            return None
        if follower.bbox.x < marker.bbox.x2 - 1e-6:
            return None
        if not marker.bbox.overlaps_vertically(follower.bbox):
            return None
        return nxt

    @staticmethod
    def _absorb(marker: PositionedBlock, follower: PositionedBlock) -> PositionedBlock:
        return PositionedBlock(
            bbox=marker.bbox.merge_with(follower.bbox),
            kind=BlockKind.TEXT,
            text=f"{marker.text} {follower.text}",
            font_size=follower.font_size,
            font_name=follower.font_name,
            bold=follower.bold,
            page_number=marker.page_number,
            index=marker.index,
        )

    def _assign(
        self,
        candidates: List[_ListCandidate],
        blocks: Sequence[PositionedBlock],
        skipped: Set[int],
        detection: Detection,
    ) -> None:
        """Decide ordered/unordered roles and list groups from numbering continuity."""
        previous: Optional[ClassifiedBlock] = None
        previous_pos: Optional[int] = None

        for i, cand in enumerate(candidates):
            adjacent = previous is not None and self._adjacent(previous_pos, cand.position, skipped)
            nxt = candidates[i + 1] if i + 1 < len(candidates) else None
            next_adjacent = nxt is not None and self._adjacent(cand.position, nxt.position, skipped)

            if cand.number is not None:
                continues = (
                    adjacent
                    and previous.role is BlockRole.LIST_ITEM_ORDERED
                    and cand.number == previous.list_number + 1
                )
                starts = cand.number == 1 or (
                    next_adjacent and nxt.number is not None and nxt.number == cand.number + 1
                )
                if continues or starts:
                    group = previous.group_id if continues else next(self.group_ids)
                    classified = ClassifiedBlock(
                        block=cand.block,
                        role=BlockRole.LIST_ITEM_ORDERED,
                        list_number=cand.number,
                        list_text=cand.body,
                        group_id=group,
                    )
                else:
                    classified = self._unordered(cand, cand.block.text, previous, adjacent)
            else:
                classified = self._unordered(cand, cand.body, previous, adjacent)

            detection.assignments[cand.position] = classified
            previous, previous_pos = classified, cand.position

    def _unordered(
        self,
        cand: _ListCandidate,
        text: str,
        previous: Optional[ClassifiedBlock],
        adjacent: bool,
    ) -> ClassifiedBlock:
        if adjacent and previous.role is BlockRole.LIST_ITEM_UNORDERED:
            group = previous.group_id
        else:
            group = next(self.group_ids)
        return ClassifiedBlock(
            block=cand.block,
            role=BlockRole.LIST_ITEM_UNORDERED,
            list_text=text,
            group_id=group,
        )

    @staticmethod
    def _adjacent(left: int, right: int, skipped: Set[int]) -> bool:
        """Whether only absorbed blocks lie between two positions."""
        return all(pos in skipped for pos in range(left + 1, right))
