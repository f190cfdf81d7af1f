"""
PDF page decoding using PyMuPDF.
"""

import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Union

from ..models import (
    BoundingBox,
    ImageReference,
    PageObjects,
    RawImage,
    RawObject,
    RawTextRun,
)

logger = logging.getLogger(__name__)

# PyMuPDF span flag for bold fonts.
BOLD_FLAG = 16


class PyMuPDFPageSource:
    """
    Builds PageObjects from PyMuPDF pages.

    Text spans come from the page's text dictionary; image blocks are written
    to `assets_dir` and referenced by a path relative to `relative_to`.
    """

    def __init__(
        self,
        assets_dir: Optional[Union[str, Path]] = None,
        relative_to: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the page source.

        Args:
            assets_dir: Directory for extracted images (images are skipped when None)
            relative_to: Directory the Markdown file will live in; image paths
                are made relative to it (defaults to the assets directory's parent)
        """
        self.assets_dir = Path(assets_dir) if assets_dir is not None else None
        if relative_to is not None:
            self.relative_to = Path(relative_to)
        elif self.assets_dir is not None:
            self.relative_to = self.assets_dir.parent
        else:
            self.relative_to = Path(".")

    def read(self, page: Any, page_number: Optional[int] = None) -> PageObjects:
        """
        Decode a PDF page.

        Args:
            page: PyMuPDF page object
            page_number: 1-based page number (defaults to the page's own number)

        Returns:
            PageObjects with text runs and images in content-stream order
        """
        if page_number is None:
            page_number = page.number + 1

        objects: List[RawObject] = []
        image_count = 0
        dict_data = page.get_text("dict")

        for block in dict_data.get("blocks", []):
            block_type = block.get("type")
            if block_type == 0:
                objects.extend(self._read_text_block(block))
            elif block_type == 1:
                image = self._read_image_block(block, page_number, image_count + 1)
                if image is not None:
                    objects.append(image)
                    image_count += 1

        logger.debug("Decoded page %d: %d objects", page_number, len(objects))
        return PageObjects(
            page_number=page_number,
            objects=objects,
            width=float(page.rect.width),
            height=float(page.rect.height),
        )

    def _read_text_block(self, block: dict) -> List[RawTextRun]:
        runs = []
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text.strip():
                    continue

                origin = span.get("origin")
                runs.append(RawTextRun(
                    bbox=BoundingBox.from_corners(*span.get("bbox", (0, 0, 0, 0))),
                    text=text,
                    font_size=float(span.get("size", 12.0)),
                    font_name=span.get("font", ""),
                    bold=bool(span.get("flags", 0) & BOLD_FLAG),
                    baseline=float(origin[1]) if origin else None,
                ))
        return runs

    def _read_image_block(self, block: dict, page_number: int, image_number: int) -> Optional[RawImage]:
        if self.assets_dir is None:
            logger.debug("Page %d: no assets directory, skipping image block %d", page_number, image_number)
            return None

        data = block.get("image")
        if not data:
            logger.warning("Page %d: image block %d has no data, skipping", page_number, image_number)
            return None

        ext = block.get("ext") or "png"
        self.assets_dir.mkdir(parents=True, exist_ok=True)
        asset_path = self.assets_dir / f"page{page_number}-image{image_number}.{ext}"
        asset_path.write_bytes(data)

        relative = os.path.relpath(asset_path, self.relative_to).replace(os.sep, "/")
        return RawImage(
            bbox=BoundingBox.from_corners(*block.get("bbox", (0, 0, 0, 0))),
            image=ImageReference(path=relative, title=f"Picture {image_number}"),
        )
