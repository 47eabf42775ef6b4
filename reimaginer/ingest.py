from __future__ import annotations

import base64
import io
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image, UnidentifiedImageError

from .config import ALLOWED_MIME_TYPES, Settings, load_settings
from .errors import IngestionError
from .state import ImagePayload, PreviewHandle, UploadedImage

logger = logging.getLogger(__name__)

_FORMAT_MIME = {"PNG": "image/png", "JPEG": "image/jpeg", "WEBP": "image/webp"}
_MIME_SUFFIX = {"image/png": ".png", "image/jpeg": ".jpg", "image/webp": ".webp"}


class PreviewStore:
    """Temporary files backing on-screen previews for one session.

    Every handle returned by `allocate` must be given back to `release` exactly
    once; `close` releases whatever is still outstanding.
    """

    def __init__(self, root: Optional[str] = None) -> None:
        self.root = Path(root or tempfile.mkdtemp(prefix="reimaginer-"))
        self.root.mkdir(parents=True, exist_ok=True)
        self._live: Dict[str, PreviewHandle] = {}
        self._counter = 0

    @property
    def live(self) -> List[PreviewHandle]:
        return list(self._live.values())

    def allocate(self, data: bytes, suffix: str = ".png") -> PreviewHandle:
        self._counter += 1
        path = self.root / f"preview_{self._counter}{suffix}"
        path.write_bytes(data)
        handle = PreviewHandle(path=str(path))
        self._live[handle.path] = handle
        return handle

    def release(self, handle: PreviewHandle) -> None:
        if handle.released or self._live.get(handle.path) is not handle:
            raise ValueError(f"preview handle already released or unknown: {handle.path}")
        del self._live[handle.path]
        handle.released = True
        Path(handle.path).unlink(missing_ok=True)

    def scratch_path(self, name: str) -> Path:
        return self.root / name

    def close(self) -> None:
        for handle in self.live:
            self.release(handle)
        shutil.rmtree(self.root, ignore_errors=True)


def _sniff_mime(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise IngestionError(f"not a readable image ({e})") from e
    mime = _FORMAT_MIME.get(fmt or "")
    if mime not in ALLOWED_MIME_TYPES:
        raise IngestionError(f"unsupported image type {fmt or 'unknown'}; use PNG, JPG or WEBP")
    return mime


def ingest_bytes(data: bytes, source: str, store: PreviewStore, *, settings: Optional[Settings] = None) -> UploadedImage:
    settings = settings or load_settings()
    if not data:
        raise IngestionError(f"{source} is empty")
    if len(data) > settings.max_upload_bytes:
        limit_mb = settings.max_upload_bytes / (1024 * 1024)
        raise IngestionError(f"{source} is larger than {limit_mb:g}MB")
    mime = _sniff_mime(data)
    payload = ImagePayload(mime_type=mime, data=base64.b64encode(data).decode("ascii"))
    preview = store.allocate(data, suffix=_MIME_SUFFIX[mime])
    logger.info("ingested %s (%s, %d bytes)", source, mime, len(data))
    return UploadedImage(source=source, preview=preview, payload=payload, size=len(data))


def ingest_file(path: str | Path, store: PreviewStore, *, settings: Optional[Settings] = None) -> UploadedImage:
    """Read an image file fully into an `UploadedImage` with a fresh preview handle."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise IngestionError(f"could not read {p.name}: {e.strerror or e}") from e
    return ingest_bytes(data, p.name, store, settings=settings)
