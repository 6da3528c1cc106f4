"""Infer a post's content type from its platform, metadata and media."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, NamedTuple

from postscore.models import PostMetadata

logger = logging.getLogger(__name__)

_VIDEO_MARKERS: tuple[str, ...] = (".mp4", ".mov", ".avi", ".webm", "video")


class _Signals(NamedTuple):
    meta: PostMetadata
    media_type: str
    media_count: int
    has_video: bool

    @property
    def is_story(self) -> bool:
        return "story" in self.media_type or self.meta.is_story

    @property
    def is_reel(self) -> bool:
        return "reel" in self.media_type or self.meta.is_reel


def _as_metadata(metadata: PostMetadata | Mapping[str, Any] | None) -> PostMetadata:
    if isinstance(metadata, PostMetadata):
        return metadata
    if isinstance(metadata, Mapping):
        return PostMetadata.model_validate({str(k): v for k, v in metadata.items()})
    return PostMetadata()


def _has_video(media_urls: Sequence[str | None]) -> bool:
    for url in media_urls:
        if url is None:
            continue
        lowered = str(url).lower()
        if any(marker in lowered for marker in _VIDEO_MARKERS):
            return True
    return False


# ── Platform rules (first match wins inside each) ──────────────────────────
def _instagram(s: _Signals) -> str:
    if s.is_story:
        return "story"
    if s.is_reel:
        return "reel"
    if s.media_count > 1:
        return "carousel"
    if s.has_video:
        return "reel"
    return "feed"


def _facebook(s: _Signals) -> str:
    if s.is_story:
        return "story"
    if s.has_video:
        return "video"
    # multi-image posts are still feed posts on Facebook
    return "feed"


def _x(s: _Signals) -> str:
    if s.meta.is_thread or s.media_count > 4:
        return "thread"
    return "post"


def _tiktok(s: _Signals) -> str:
    if s.media_count > 1:
        return "carousel"
    return "video"


def _youtube(s: _Signals) -> str:
    # Shorts vs. long-form needs the duration, which we never get.
    return "video"


def _linkedin(s: _Signals) -> str:
    return "post"


def _default(s: _Signals) -> str:
    if s.has_video:
        return "video"
    if s.media_count > 1:
        return "carousel"
    return "post"


_PLATFORM_RULES: dict[str, Callable[[_Signals], str]] = {
    "instagram": _instagram,
    "facebook": _facebook,
    "x": _x,
    "twitter": _x,
    "tiktok": _tiktok,
    "youtube": _youtube,
    "linkedin": _linkedin,
}


def classify(
    platform: str | None,
    metadata: PostMetadata | Mapping[str, Any] | None = None,
    media_urls: Sequence[str | None] | None = None,
) -> str:
    """Return a lowercase content-type label such as ``reel`` or ``thread``.

    An explicit ``contentType``, ``format`` or ``postType`` in *metadata*
    (checked in that order) always wins. Otherwise the label is inferred from
    platform-specific rules over the media type, media count and whether any
    media URL looks like a video.
    """
    meta = _as_metadata(metadata)

    for hint in (meta.content_type, meta.format, meta.post_type):
        if hint:
            return hint.lower()

    urls = list(media_urls or [])
    signals = _Signals(
        meta=meta,
        media_type=(meta.media_type or "").lower(),
        media_count=len(urls),
        has_video=_has_video(urls),
    )

    key = str(platform or "").lower()
    rule = _PLATFORM_RULES.get(key, _default)
    label = rule(signals)
    logger.debug("Classified %s post as %s", key or "<unknown>", label)
    return label
