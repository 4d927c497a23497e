"""
Media Storage
=============
Local-filesystem blob store for report photos and videos.

Stored files get a generated name ``<epoch-ms>-<8 hex>.<ext>`` under
``media_dir`` and are addressed by the URL ``<url_prefix>/<name>``. The
extension follows the validated content type, so the type a stored file is
served with never comes from the client's filename.
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from urllib.parse import unquote_to_bytes

from werkzeug.utils import secure_filename

from app.domain.exceptions import MediaError
from app.utils.time import epoch_millis

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:(?P<type>[^;,]*)(?P<params>(?:;[^;,]*)*?)(?P<b64>;base64)?,(?P<payload>.*)$", re.S)

# image types a browser runs scripts in when served same-origin
_SCRIPTABLE_TYPES = {"image/svg+xml"}

# mimetypes has no entry for some common phone formats
_EXTENSION_OVERRIDES = {
    "image/jpeg": "jpg",
    "image/heic": "heic",
    "image/webp": "webp",
    "video/quicktime": "mov",
    "video/mp4": "mp4",
    "video/webm": "webm",
}


@dataclass(frozen=True)
class MediaUpload:
    """One blob waiting to be stored."""

    data: bytes
    filename: str | None
    content_type: str


@dataclass(frozen=True)
class UploadedMedia:
    """A stored blob: its public URL and the MIME type it was stored with."""

    url: str
    kind: str
    name: str


def is_supported_media_type(content_type: str | None) -> bool:
    if not content_type or content_type.lower() in _SCRIPTABLE_TYPES:
        return False
    return content_type.split("/", 1)[0] in {"image", "video"}


def decode_data_url(value: str) -> MediaUpload:
    """Decode a ``data:<type>;base64,<payload>`` string into an upload."""
    match = _DATA_URL_RE.match(value or "")
    if not match:
        raise MediaError("Malformed data URL")

    content_type = match.group("type") or "application/octet-stream"
    payload = match.group("payload")
    if match.group("b64"):
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise MediaError("Data URL payload is not valid base64") from None
    else:
        data = unquote_to_bytes(payload)

    extension = _extension_for(content_type)
    return MediaUpload(data=data, filename=f"inline.{extension}" if extension else None, content_type=content_type)


def _extension_for(content_type: str) -> str:
    """Extension for a validated content type. The client's filename is never used."""
    if content_type in _EXTENSION_OVERRIDES:
        return _EXTENSION_OVERRIDES[content_type]
    guessed = mimetypes.guess_extension(content_type or "")
    return guessed.lstrip(".") if guessed else "bin"


class MediaStorage:
    """Stores uploaded media on disk and hands back stable URLs."""

    def __init__(self, media_dir: str, url_prefix: str = "/media") -> None:
        self._root = Path(media_dir)
        self._url_prefix = url_prefix.rstrip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def url_prefix(self) -> str:
        return self._url_prefix

    def url_for(self, name: str) -> str:
        return f"{self._url_prefix}/{name}"

    def upload(self, data: bytes, filename: str | None, content_type: str) -> str | None:
        """
        Store one blob.

        Returns:
            The public URL, or None when the blob is empty, not an image or
            video, or could not be written
        """
        stored = self._store(MediaUpload(data=data, filename=filename, content_type=content_type))
        return stored.url if stored else None

    def upload_many(self, uploads: Iterable[MediaUpload]) -> list[UploadedMedia]:
        """
        Store blobs one after another.

        A blob that fails is logged and skipped; the result holds the
        successes in input order.
        """
        stored: list[UploadedMedia] = []
        for upload in uploads:
            result = self._store(upload)
            if result is not None:
                stored.append(result)
        return stored

    def _store(self, upload: MediaUpload) -> UploadedMedia | None:
        label = upload.filename or "<inline>"
        if not upload.data:
            logger.warning("Skipping empty upload %s", label)
            return None
        if not is_supported_media_type(upload.content_type):
            logger.warning("Skipping upload %s with unsupported type %s", label, upload.content_type)
            return None

        name = f"{epoch_millis()}-{uuid.uuid4().hex[:8]}.{_extension_for(upload.content_type)}"
        path = self._root / name
        try:
            path.write_bytes(upload.data)
        except OSError as e:
            logger.error(f"Failed to store upload {label}: {e}")
            return None

        logger.info("Stored media %s (%s, %d bytes)", name, upload.content_type, len(upload.data))
        return UploadedMedia(url=self.url_for(name), kind=upload.content_type, name=name)

    def resolve(self, name: str) -> Path | None:
        """Path of a stored file, None for unknown or unsafe names."""
        if not name or secure_filename(name) != name:
            return None
        path = self._root / name
        return path if path.is_file() else None

    def owns(self, url: str | None) -> bool:
        return bool(url) and url.startswith(self._url_prefix + "/")

    def delete(self, url: str) -> bool:
        """Remove a file previously stored here. URLs from elsewhere are left alone."""
        if not self.owns(url):
            return False
        path = self.resolve(url[len(self._url_prefix) + 1:])
        if path is None:
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete media {path.name}: {e}")
            return False
        logger.info("Deleted media %s", path.name)
        return True
