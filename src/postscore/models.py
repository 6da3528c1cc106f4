"""Domain models used across the scorer.

Every numeric and metadata field is coerced on the way in, so building a model
from a loosely-shaped analytics record never raises.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_number(value: Any) -> float:
    """Best-effort conversion to a finite, non-negative float (0.0 otherwise)."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _to_text(value: Any) -> str | None:
    if not value:
        return None
    return str(value)


class PostMetrics(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    impressions: int = 0
    engagement: int = 0  # likes + comments + shares
    engagement_rate: float = Field(default=0.0, alias="engagementRate")  # percentage

    @field_validator("impressions", "engagement", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return int(to_number(value))

    @field_validator("engagement_rate", mode="before")
    @classmethod
    def _coerce_rate(cls, value: Any) -> float:
        return to_number(value)


class PostMetadata(BaseModel):
    """Optional hints attached to a post; unknown keys are kept as extras."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    content_type: str | None = Field(default=None, alias="contentType")
    format: str | None = None
    post_type: str | None = Field(default=None, alias="postType")
    media_type: str | None = Field(default=None, alias="mediaType")
    is_story: bool = Field(default=False, alias="isStory")
    is_reel: bool = Field(default=False, alias="isReel")
    is_thread: bool = Field(default=False, alias="isThread")

    @field_validator("content_type", "format", "post_type", "media_type", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _to_text(value)

    @field_validator("is_story", "is_reel", "is_thread", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return bool(value)


class RawPost(BaseModel):
    """A post as handed to the batch scorer, before classification."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    platform: str = ""
    metadata: PostMetadata = Field(default_factory=PostMetadata)
    media_urls: list[str | None] = Field(default_factory=list, alias="mediaUrls")
    metrics: PostMetrics = Field(default_factory=PostMetrics)

    @field_validator("id", "platform", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def _coerce_metadata(cls, value: Any) -> Any:
        if isinstance(value, PostMetadata):
            return value
        if isinstance(value, dict):
            return PostMetadata.model_validate({str(k): v for k, v in value.items()})
        return PostMetadata()

    @field_validator("media_urls", mode="before")
    @classmethod
    def _coerce_media(cls, value: Any) -> list[str | None]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        try:
            return [None if url is None else str(url) for url in value]
        except TypeError:
            return []

    @field_validator("metrics", mode="before")
    @classmethod
    def _coerce_metrics(cls, value: Any) -> Any:
        if isinstance(value, PostMetrics):
            return value
        if isinstance(value, dict):
            return PostMetrics.model_validate(value)
        return PostMetrics()


class PostWithMetrics(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    platform: str
    post_type: str = Field(alias="postType")
    metrics: PostMetrics = Field(default_factory=PostMetrics)


class Benchmarks(BaseModel):
    """Top and average values over a segment's best posts."""

    model_config = ConfigDict(frozen=True)

    top_impressions: float = 0.0
    top_engagement: float = 0.0
    top_engagement_rate: float = 0.0
    avg_impressions: float = 0.0
    avg_engagement: float = 0.0
    avg_engagement_rate: float = 0.0

    @property
    def is_empty(self) -> bool:
        return (
            self.top_impressions == 0
            and self.top_engagement == 0
            and self.top_engagement_rate == 0
        )


class ScoredPost(PostWithMetrics):
    score: int = 0
    tier: str = ""
