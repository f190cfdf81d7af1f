"""
Conversion options shared by every pipeline stage.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class ConversionOptions:
    """
    Thresholds and switches for extraction, classification and emission.

    Distances are in PDF points.

    Attributes:
        line_tolerance: Maximum baseline difference for runs on the same line
        merge_gap_ratio: Maximum gap between mergeable runs, as a fraction of
            the font size
        heading_size_ratio: Minimum font size, relative to body text, for a
            heading
        max_body_font_size: Upper bound on the estimated body font size
        max_heading_chars: Longer heading-sized text is treated as a paragraph
        max_heading_level: Deepest heading level emitted
        column_tolerance: Slack allowed when matching table column boundaries
        min_table_rows: Minimum aligned rows (header included) for a table
        min_table_columns: Minimum cells per row for a table
        page_separator: Text placed between the Markdown of consecutive pages
        workers: Number of pages processed concurrently
        dpi: Resolution of rendered debug images
    """
    line_tolerance: float = 3.0
    merge_gap_ratio: float = 0.6
    heading_size_ratio: float = 1.2
    max_body_font_size: Optional[float] = 14.0
    max_heading_chars: int = 200
    max_heading_level: int = 6
    column_tolerance: float = 2.0
    min_table_rows: int = 2
    min_table_columns: int = 2
    page_separator: str = "\n\n---\n\n"
    workers: int = 1
    dpi: int = 150

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check option values.

        Raises:
            ValueError: If any option is out of range
        """
        if self.line_tolerance < 0:
            raise ValueError(f"line_tolerance must be non-negative, got {self.line_tolerance}")
        if self.merge_gap_ratio < 0:
            raise ValueError(f"merge_gap_ratio must be non-negative, got {self.merge_gap_ratio}")
        if self.heading_size_ratio <= 1.0:
            raise ValueError(f"heading_size_ratio must be greater than 1, got {self.heading_size_ratio}")
        if self.max_body_font_size is not None and self.max_body_font_size <= 0:
            raise ValueError(f"max_body_font_size must be positive, got {self.max_body_font_size}")
        if self.max_heading_chars < 1:
            raise ValueError(f"max_heading_chars must be at least 1, got {self.max_heading_chars}")
        if not 1 <= self.max_heading_level <= 6:
            raise ValueError(f"max_heading_level must be between 1 and 6, got {self.max_heading_level}")
        if self.min_table_rows < 2:
            raise ValueError(f"min_table_rows must be at least 2, got {self.min_table_rows}")
        if self.min_table_columns < 2:
            raise ValueError(f"min_table_columns must be at least 2, got {self.min_table_columns}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.dpi < 1:
            raise ValueError(f"dpi must be positive, got {self.dpi}")

    @classmethod
    def from_cli(
        cls,
        *,
        workers: int = 1,
        dpi: int = 150,
        heading_ratio: Optional[float] = None,
        page_separator: Optional[str] = None,
    ) -> "ConversionOptions":
        """
        Build options from command-line values.

        Args:
            workers: Pages processed concurrently
            dpi: Debug image resolution
            heading_ratio: Override for heading_size_ratio
            page_separator: Override for page_separator; escaped ``\\n`` sequences
                are expanded

        Returns:
            ConversionOptions instance

        Raises:
            ValueError: If any value is invalid
        """
        kwargs: Dict[str, Any] = {"workers": workers, "dpi": dpi}
        if heading_ratio is not None:
            kwargs["heading_size_ratio"] = heading_ratio
        if page_separator is not None:
            kwargs["page_separator"] = page_separator.replace("\\n", "\n")
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return asdict(self)


__all__ = ["ConversionOptions"]
