"""
Image reference model for embedded page images.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath
from typing import Optional, Dict, Any

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


@dataclass(frozen=True)
class ImageReference:
    """
    Points at an image asset stored outside the Markdown text.

    Attributes:
        path: Relative path or identifier of the image asset
        alt: Alternative text (defaults to the filename stem when emitted)
        title: Optional title shown by Markdown renderers
    """
    path: str
    alt: Optional[str] = None
    title: Optional[str] = None

    @property
    def resolved_alt(self) -> str:
        """Alt text, falling back to the filename stem of the path."""
        if self.alt:
            return self.alt
        return PurePosixPath(self.path.replace("\\", "/")).stem

    @property
    def is_relative(self) -> bool:
        """
        Whether the path is a relative reference that resolves against the document's directory.

        URLs, data URIs, drive-qualified, absolute and empty paths are
        rejected. Parent segments such as ``../assets/a.png`` are allowed, so
        assets may live beside the output directory.
        """
        path = self.path.strip()
        if not path or path != self.path:
            return False
        if PureWindowsPath(path).drive:
            return False
        if _SCHEME_RE.match(path):
            return False
        return not PurePosixPath(path.replace("\\", "/")).is_absolute()

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "alt": self.alt, "title": self.title}
