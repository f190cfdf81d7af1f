"""
Assigns Markdown roles to positioned blocks.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from ..config import ConversionOptions
from ..detectors import BaseDetector, HeadingDetector, ListDetector, TableDetector
from ..errors import ClassificationAmbiguity
from ..models import BlockRole, ClassifiedBlock, PositionedBlock

logger = logging.getLogger(__name__)


@dataclass
class ClassificationResult:
    """Classified blocks of one page plus the ambiguities met on the way."""
    page_number: Optional[int] = None
    blocks: List[ClassifiedBlock] = field(default_factory=list)
    ambiguities: List[ClassificationAmbiguity] = field(default_factory=list)

    def roles(self) -> List[BlockRole]:
        return [block.role for block in self.blocks]

    def signatures(self) -> list:
        return [block.signature() for block in self.blocks]

    def __iter__(self):
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)


class StructureClassifier:
    """
    Classifies a page's blocks, preserving their order.

    Rules apply in priority order: heading, list item, table cell, image,
    paragraph. A block claimed by an earlier rule is never re-claimed by a
    later one. Ambiguous blocks are reported and classified as paragraphs.
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        """
        Initialize the classifier.

        Args:
            options: Conversion options (defaults are used when omitted)
        """
        self.options = options or ConversionOptions()

    def build_detectors(self) -> List[BaseDetector]:
        """Detectors for one page, in priority order, sharing one group id sequence."""
        group_ids = itertools.count()
        return [
            HeadingDetector(self.options),
            ListDetector(group_ids),
            TableDetector(self.options, group_ids),
        ]

    def classify(self, blocks: Iterable[PositionedBlock]) -> ClassificationResult:
        """
        Classify the blocks of one page.

        Args:
            blocks: Blocks in reading order (a PageLayout or any iterable)

        Returns:
            ClassificationResult with one ClassifiedBlock per surviving block
        """
        blocks = list(blocks)
        page_number = blocks[0].page_number if blocks else None
        result = ClassificationResult(page_number=page_number)
        if not blocks:
            return result

        claimed: Dict[int, ClassifiedBlock] = {}
        skipped: Set[int] = set()

        for detector in self.build_detectors():
            detection = detector.detect(blocks, claimed, skipped)
            claimed.update(detection.assignments)
            skipped |= detection.absorbed
            result.ambiguities.extend(detection.ambiguities)

        for pos, block in enumerate(blocks):
            if pos in skipped:
                continue
            if pos in claimed:
                result.blocks.append(claimed[pos])
            elif block.is_image:
                result.blocks.append(ClassifiedBlock(block=block, role=BlockRole.IMAGE))
            else:
                result.blocks.append(ClassifiedBlock(block=block, role=BlockRole.PARAGRAPH))

        by_index = {block.index: block for block in blocks}
        for ambiguity in result.ambiguities:
            logger.warning("%s; classified as paragraph", ambiguity)
            if ambiguity.block_index in by_index:
                logger.debug("Ambiguous block: %s", by_index[ambiguity.block_index].to_dict())
        logger.debug(
            "Page %s: classified %d blocks (%d ambiguous)",
            page_number, len(result.blocks), len(result.ambiguities),
        )
        return result
