"""
Page rasterisation for debug images.
"""

import numpy as np
import cv2
import fitz  # PyMuPDF

from ..models import PageObjects, RawImage

# Pixmap channel count -> OpenCV conversion to BGR
_TO_BGR = {
    1: cv2.COLOR_GRAY2BGR,
    3: cv2.COLOR_RGB2BGR,
    4: cv2.COLOR_RGBA2BGR,
}

_INK = (0, 0, 0)
_PLACEHOLDER = (200, 200, 200)


class PageRenderer:
    """
    Produces BGR images of pages at a fixed resolution.

    PDF pages are rasterised with PyMuPDF. Pages that only exist as
    PageObjects (e.g. Markdown typeset by the reader) are drawn onto a blank
    canvas with OpenCV, so both can be annotated the same way.
    """

    def __init__(self, dpi: int = 150):
        """
        Initialize the page renderer.

        Args:
            dpi: Output resolution (default: 150)
        """
        self.dpi = dpi
        self.zoom = dpi / 72.0  # PDF points to pixels

    @property
    def scale(self) -> float:
        """Factor from PDF points to image pixels."""
        return self.zoom

    def render(self, page) -> np.ndarray:
        """
        Rasterise a PDF page.

        Args:
            page: PyMuPDF page object

        Returns:
            OpenCV image (BGR format)
        """
        pix = page.get_pixmap(matrix=fitz.Matrix(self.zoom, self.zoom), alpha=False)
        img = np.frombuffer(pix.samples, dtype=np.uint8).reshape(pix.height, pix.width, pix.n)
        return cv2.cvtColor(img, _TO_BGR[pix.n])

    def render_objects(self, page: PageObjects) -> np.ndarray:
        """
        Draw decoded page objects onto a white canvas.

        Text runs are written at their baseline; images are shown as grey
        placeholders labelled with their path.

        Args:
            page: Page objects to draw

        Returns:
            OpenCV image (BGR format)
        """
        width = int(np.ceil(page.width * self.zoom))
        height = int(np.ceil(page.height * self.zoom))
        canvas = np.full((height, width, 3), 255, dtype=np.uint8)

        for obj in page.objects:
            box = obj.bbox.scaled(self.zoom)
            if isinstance(obj, RawImage):
                cv2.rectangle(canvas, (int(box.x), int(box.y)), (int(box.x2), int(box.y2)), _PLACEHOLDER, -1)
                label, origin, size = obj.image.path, (int(box.x) + 4, int(box.center_y)), 10.0
            else:
                label, origin, size = obj.text, (int(box.x), int(obj.effective_baseline * self.zoom)), obj.font_size
            # Hershey fonts are about 22px tall at scale 1.0
            font_scale = size * self.zoom / 22.0
            cv2.putText(canvas, label, origin, cv2.FONT_HERSHEY_SIMPLEX, font_scale, _INK, 1, cv2.LINE_AA)

        return canvas
