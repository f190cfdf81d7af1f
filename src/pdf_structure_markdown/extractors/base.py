"""
Base class for layout extractors.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from ..models import PageObjects, PositionedBlock


class BaseExtractor(ABC):
    """
    Abstract base class for turning decoded page objects into blocks.

    Subclasses implement `extract` for a specific reading-order strategy.
    """

    @abstractmethod
    def extract(self, page: PageObjects) -> Iterable[PositionedBlock]:
        """
        Extract positioned blocks from a page.

        Args:
            page: Decoded objects of one page

        Returns:
            Blocks in reading order

        Raises:
            ExtractionError: If the page has nothing to extract
        """
        pass

    def preprocess(self, page: PageObjects) -> PageObjects:
        """
        Optional preprocessing step before extraction.
        Override in subclasses if needed.

        Args:
            page: The page to preprocess

        Returns:
            Preprocessed page
        """
        return page
