"""Image ingestion: turn a user-supplied file into a data URL.

Images are opaque to this package. Files are embedded as-is; resizing and
recompression belong to an external collaborator.
"""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path


class ImageIngestError(ValueError):
    """The file could not be turned into an image URL."""


def file_to_data_url(path: str | Path) -> str:
    """Read ``path`` and return a ``data:image/...;base64,`` URL.

    Raises:
        ImageIngestError: unreadable file or not an image type.
    """
    path = Path(path)
    mime, _ = mimetypes.guess_type(path.name)
    if not mime or not mime.startswith("image/"):
        raise ImageIngestError(f"Could not process image {path.name}: not an image file")
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageIngestError(f"Could not process image {path.name}: {exc}") from exc
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"
