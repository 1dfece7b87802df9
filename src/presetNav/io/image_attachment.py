"""Read a user-picked image into an embeddable data URL."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from ..errors import StorageError

_MAGIC: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


def _sniff_mime(blob: bytes) -> str:
    for magic, mime in _MAGIC:
        if blob.startswith(magic):
            return mime
    if blob[:4] == b"RIFF" and blob[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"


def read_image_as_data_url(path: Path) -> str:
    """Return ``data:<mime>;base64,<payload>`` for the file at *path*.

    No size or type checks happen here; the file picker's filter is the only
    gate, as for the host's own image attachments.
    """

    path = Path(path)
    try:
        blob = path.read_bytes()
    except OSError as exc:
        raise StorageError(f"Cannot read image {path}: {exc}") from exc
    mime = mimetypes.guess_type(path.name)[0] or _sniff_mime(blob)
    encoded = base64.b64encode(blob).decode("ascii")
    return f"data:{mime};base64,{encoded}"


__all__ = ["read_image_as_data_url"]
