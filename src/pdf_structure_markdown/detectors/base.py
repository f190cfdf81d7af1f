"""
Base class for structure detectors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set
import numpy as np

from ..errors import ClassificationAmbiguity
from ..models import ClassifiedBlock, PositionedBlock


@dataclass
class Detection:
    """
    Output of one detector pass.

    Attributes:
        assignments: Classified blocks keyed by position in the block sequence
        absorbed: Positions whose content was folded into another block
        ambiguities: Diagnostics for blocks that fell back to paragraph
    """
    assignments: Dict[int, ClassifiedBlock] = field(default_factory=dict)
    absorbed: Set[int] = field(default_factory=set)
    ambiguities: List[ClassificationAmbiguity] = field(default_factory=list)


class BaseDetector(ABC):
    """
    Abstract base class for structure rules.

    A detector looks at a page's blocks and claims the ones matching its
    rule. Blocks already claimed by a higher-priority detector are passed in
    `claimed` and must be left alone.
    """

    @abstractmethod
    def detect(
        self,
        blocks: Sequence[PositionedBlock],
        claimed: Dict[int, ClassifiedBlock],
        skipped: Set[int],
    ) -> Detection:
        """
        Claim blocks matching this detector's rule.

        Args:
            blocks: Page blocks in reading order
            claimed: Blocks already classified by earlier detectors
            skipped: Positions absorbed into other blocks

        Returns:
            Detection with new assignments and diagnostics
        """
        pass

    @staticmethod
    def cluster_positions(positions: List[float], threshold: float = 15) -> List[float]:
        """
        Cluster nearby values into representative values.

        Args:
            positions: Values to cluster
            threshold: Maximum distance to cluster together

        Returns:
            List of cluster means, ascending
        """
        if not positions:
            return []

        positions = sorted(positions)
        clusters = [[positions[0]]]

        for pos in positions[1:]:
            if pos - clusters[-1][-1] < threshold:
                clusters[-1].append(pos)
            else:
                clusters.append([pos])

        return [float(np.mean(c)) for c in clusters]

    @staticmethod
    def ambiguity(block: PositionedBlock, reason: str) -> ClassificationAmbiguity:
        return ClassificationAmbiguity(block.page_number, block.index, reason)
