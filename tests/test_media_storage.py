"""Tests for the local media store and data URL decoding."""

from __future__ import annotations

import base64

import pytest

from app.domain.exceptions import MediaError
from infrastructure.storage.media_storage import MediaUpload, decode_data_url, is_supported_media_type

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def test_upload_writes_file_and_returns_url(media_storage):
    url = media_storage.upload(PNG_BYTES, "leaf.png", "image/png")
    assert url.startswith("/media/")
    assert url.endswith(".png")

    path = media_storage.resolve(url.rsplit("/", 1)[1])
    assert path is not None
    assert path.read_bytes() == PNG_BYTES


@pytest.mark.parametrize(
    "data,content_type",
    [(b"", "image/png"), (b"%PDF", "application/pdf"), (b"x", "")],
)
def test_upload_rejects_empty_or_unsupported(media_storage, data, content_type):
    assert media_storage.upload(data, "file", content_type) is None
    assert list(media_storage.root.iterdir()) == []


def test_upload_many_skips_failures_and_keeps_order(media_storage):
    uploads = [
        MediaUpload(b"one", "a.jpg", "image/jpeg"),
        MediaUpload(b"", "b.jpg", "image/jpeg"),
        MediaUpload(b"three", "c.mp4", "video/mp4"),
    ]
    stored = media_storage.upload_many(uploads)
    assert [m.kind for m in stored] == ["image/jpeg", "video/mp4"]
    assert stored[0].url.endswith(".jpg")
    assert stored[1].url.endswith(".mp4")


def test_extension_falls_back_to_content_type(media_storage):
    url = media_storage.upload(b"clip", None, "video/quicktime")
    assert url.endswith(".mov")


@pytest.mark.parametrize(
    "filename,content_type,extension",
    [("x.html", "image/png", ".png"), ("clip.js", "video/mp4", ".mp4"), ("photo.exe", "image/jpeg", ".jpg")],
)
def test_extension_ignores_client_filename(media_storage, filename, content_type, extension):
    url = media_storage.upload(PNG_BYTES, filename, content_type)
    assert url.endswith(extension)
    assert [p.suffix for p in media_storage.root.iterdir()] == [extension]


def test_unknown_image_subtype_is_stored_as_binary(media_storage):
    url = media_storage.upload(PNG_BYTES, "page.html", "image/x-made-up")
    assert url.endswith(".bin")


@pytest.mark.parametrize("name", ["", "../secret", "a/b.jpg", "missing.jpg"])
def test_resolve_rejects_unknown_or_unsafe_names(media_storage, name):
    assert media_storage.resolve(name) is None


def test_delete_only_touches_owned_urls(media_storage):
    url = media_storage.upload(PNG_BYTES, "leaf.png", "image/png")
    assert media_storage.owns(url)
    assert not media_storage.owns("https://cdn.test/leaf.png")

    assert media_storage.delete("https://cdn.test/leaf.png") is False
    assert media_storage.delete(url) is True
    assert media_storage.delete(url) is False


def test_decode_base64_data_url():
    payload = base64.b64encode(PNG_BYTES).decode("ascii")
    upload = decode_data_url(f"data:image/png;base64,{payload}")
    assert upload.data == PNG_BYTES
    assert upload.content_type == "image/png"
    assert upload.filename == "inline.png"


def test_decode_percent_encoded_data_url():
    upload = decode_data_url("data:image/svg+xml,%3Csvg%3E%3C/svg%3E")
    assert upload.data == b"<svg></svg>"
    assert upload.content_type == "image/svg+xml"


@pytest.mark.parametrize("value", ["", "https://cdn.test/a.png", "data:image/png;base64,@@@"])
def test_decode_rejects_bad_input(value):
    with pytest.raises(MediaError):
        decode_data_url(value)


def test_supported_media_types():
    assert is_supported_media_type("image/heic")
    assert is_supported_media_type("video/mp4")
    assert not is_supported_media_type("image/svg+xml")
    assert not is_supported_media_type("application/pdf")
    assert not is_supported_media_type(None)
