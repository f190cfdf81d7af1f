"""
Structure classification components.
"""

from .structure_classifier import StructureClassifier, ClassificationResult

__all__ = ["StructureClassifier", "ClassificationResult"]
