"""
Media Shape Normalizer
======================
Reports attach photos and videos. Early records stored a single URL with a
single MIME type; current records store two parallel arrays. Every read path
(feed card, detail view, edit form) goes through :func:`classify_media` /
:func:`normalize_media` so the two shapes never reach rendering code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from app.enums.common import MediaKind

DEFAULT_MEDIA_KIND = "image/jpeg"

INLINE_URL_PREFIXES = ("data:", "blob:")


@dataclass(frozen=True, slots=True)
class MediaAsset:
    """One attached asset: its URL and the MIME type it was uploaded with."""

    url: str
    kind: str = DEFAULT_MEDIA_KIND

    @property
    def is_video(self) -> bool:
        return self.kind.startswith("video")

    @property
    def render_kind(self) -> MediaKind:
        return MediaKind.VIDEO if self.is_video else MediaKind.IMAGE

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "kind": self.kind, "render_as": self.render_kind.value}


@dataclass(frozen=True, slots=True)
class EmptyMedia:
    """No media attached."""

    def assets(self) -> tuple[MediaAsset, ...]:
        return ()

    def to_arrays(self) -> tuple[list[str], list[str]]:
        return [], []


@dataclass(frozen=True, slots=True)
class SingleMedia:
    """Legacy shape: one scalar URL and one scalar kind."""

    url: str
    kind: str = DEFAULT_MEDIA_KIND

    def assets(self) -> tuple[MediaAsset, ...]:
        return (MediaAsset(self.url, self.kind),)

    def to_arrays(self) -> tuple[list[str], list[str]]:
        return [self.url], [self.kind]


@dataclass(frozen=True, slots=True)
class MultipleMedia:
    """Current shape: ordered assets, index i of each array describing the same file."""

    items: tuple[MediaAsset, ...]

    def assets(self) -> tuple[MediaAsset, ...]:
        return self.items

    def to_arrays(self) -> tuple[list[str], list[str]]:
        return [a.url for a in self.items], [a.kind for a in self.items]


Media = Union[EmptyMedia, SingleMedia, MultipleMedia]


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def _kind_at(kinds: str | Sequence[str] | None, index: int) -> str:
    """Kind for position *index*; a scalar kind applies to every position."""
    if kinds is None:
        return DEFAULT_MEDIA_KIND
    if isinstance(kinds, str):
        return kinds or DEFAULT_MEDIA_KIND
    if index < len(kinds) and not _is_blank(kinds[index]):
        return kinds[index]
    return DEFAULT_MEDIA_KIND


def classify_media(
    media: str | Sequence[str] | None,
    media_kind: str | Sequence[str] | None = None,
) -> Media:
    """Turn whatever shape a record carries into a tagged :data:`Media` value.

    Missing kinds default to ``image/jpeg``, surplus kinds are ignored and
    blank URLs are dropped together with their kind.
    """
    if media is None:
        return EmptyMedia()

    if isinstance(media, str):
        if _is_blank(media):
            return EmptyMedia()
        return SingleMedia(media, _kind_at(media_kind, 0))

    assets = tuple(
        MediaAsset(url, _kind_at(media_kind, index))
        for index, url in enumerate(media)
        if not _is_blank(url)
    )
    if not assets:
        return EmptyMedia()
    return MultipleMedia(assets)


def normalize_media(
    media: str | Sequence[str] | None,
    media_kind: str | Sequence[str] | None = None,
) -> tuple[list[str], list[str]]:
    """Return ``(urls, kinds)`` as two equal-length lists."""
    return classify_media(media, media_kind).to_arrays()


def media_assets(urls: Iterable[str], kinds: Iterable[str]) -> list[MediaAsset]:
    """Pair canonical URL/kind arrays back into assets."""
    return [MediaAsset(url, kind) for url, kind in zip(urls, kinds)]


def is_inline_media(url: str | None) -> bool:
    """``data:`` and ``blob:`` URLs carry the payload itself rather than a link."""
    return bool(url) and url.startswith(INLINE_URL_PREFIXES)
