import logging
import sys
from pathlib import Path

import cv2
import fitz  # PyMuPDF
import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from pdf_structure_markdown.models import (  # noqa: E402
    BlockKind,
    BoundingBox,
    ClassifiedBlock,
    ImageReference,
    PageObjects,
    PositionedBlock,
    RawImage,
    RawTextRun,
)


def _text_width(text: str, size: float) -> float:
    return len(text) * size * 0.5


@pytest.fixture
def text_block():
    """Factory for text PositionedBlocks; width defaults to half an em per character."""

    def make(text, x=72.0, y=72.0, size=12.0, width=None, index=0, page_number=1, bold=False):
        return PositionedBlock(
            bbox=BoundingBox(x, y, width if width is not None else _text_width(text, size), size),
            kind=BlockKind.TEXT,
            text=text,
            font_size=size,
            font_name="Helvetica-Bold" if bold else "Helvetica",
            bold=bold,
            page_number=page_number,
            index=index,
        )

    return make


@pytest.fixture
def image_block():
    """Factory for image PositionedBlocks."""

    def make(path="images/figure.png", alt=None, title=None, x=72.0, y=72.0, index=0, page_number=1):
        return PositionedBlock(
            bbox=BoundingBox(x, y, 200.0, 150.0),
            kind=BlockKind.IMAGE,
            image=ImageReference(path=path, alt=alt, title=title),
            page_number=page_number,
            index=index,
        )

    return make


@pytest.fixture
def lines(text_block):
    """Factory laying out one block per line, 18pt apart, indexed in order."""

    def make(*specs, start_y=72.0, page_number=1):
        blocks = []
        y = start_y
        for i, spec in enumerate(specs):
            if isinstance(spec, str):
                text, size = spec, 12.0
            else:
                text, size = spec
            blocks.append(text_block(text, y=y, size=size, index=i, page_number=page_number))
            y += size * 1.5
        return blocks

    return make


@pytest.fixture
def classified():
    """Factory wrapping a block in a ClassifiedBlock."""

    def make(block, role, **fields):
        return ClassifiedBlock(block=block, role=role, **fields)

    return make


@pytest.fixture
def text_run():
    """Factory for RawTextRuns sitting on a baseline."""

    def make(text, x=72.0, baseline=84.0, size=12.0, width=None, font="Helvetica", bold=False):
        width = width if width is not None else _text_width(text, size)
        return RawTextRun(
            bbox=BoundingBox(x, baseline - size * 0.8, width, size),
            text=text,
            font_size=size,
            font_name=font,
            bold=bold,
            baseline=baseline,
        )

    return make


@pytest.fixture
def page():
    """Factory for PageObjects."""

    def make(*objects, page_number=1):
        return PageObjects(page_number=page_number, objects=objects)

    return make


@pytest.fixture
def raw_image():
    def make(path="images/figure.png", x=72.0, y=300.0, alt=None, title=None):
        return RawImage(bbox=BoundingBox(x, y, 200.0, 150.0), image=ImageReference(path, alt, title))

    return make


@pytest.fixture
def isolate_logging():
    """Isolate logging configuration between tests (the CLI calls basicConfig)."""
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)


def _png_bytes() -> bytes:
    image = np.full((20, 30, 3), 128, dtype=np.uint8)
    ok, buffer = cv2.imencode(".png", image)
    assert ok
    return buffer.tobytes()


@pytest.fixture
def sample_pdf(tmp_path):
    """Two pages: a report page with heading, paragraph, list and image, then an empty page."""
    doc = fitz.open()
    page = doc.new_page(width=612, height=792)
    page.insert_text((72, 90), "Quarterly Report", fontsize=24, fontname="hebo")
    page.insert_text((72, 130), "Sales grew in every region.", fontsize=11)
    page.insert_text((72, 160), "- apples", fontsize=11)
    page.insert_text((72, 180), "- pears", fontsize=11)
    page.insert_image(fitz.Rect(72, 300, 222, 400), stream=_png_bytes())
    doc.new_page(width=612, height=792)

    path = tmp_path / "sample.pdf"
    doc.save(str(path))
    doc.close()
    return path
