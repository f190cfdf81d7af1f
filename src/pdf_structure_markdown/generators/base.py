"""
Base class for output generators.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from ..models import ClassifiedBlock


class BaseGenerator(ABC):
    """Abstract base class for output generation."""

    @abstractmethod
    def emit(self, blocks: Iterable[ClassifiedBlock]) -> str:
        """Generate output from classified blocks."""
        pass
