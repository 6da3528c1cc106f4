"""Smart 0–100 post score, relative to the brand's own top performers."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from postscore.benchmarks import benchmarks_by_segment, benchmarks_for, segment_key
from postscore.classify import classify
from postscore.models import Benchmarks, PostWithMetrics, RawPost

logger = logging.getLogger(__name__)

# ── Relative part (0–70) ───────────────────────────────────────────────────
_RELATIVE_POINTS = 70
_W_IMPRESSIONS = 0.25
_W_ENGAGEMENT = 0.50
_W_RATE = 0.25

# ── Absolute tiers: (threshold, points), highest first ─────────────────────
_ENGAGEMENT_TIERS: tuple[tuple[float, int], ...] = ((20, 15), (10, 10), (5, 5))
_RATE_TIERS: tuple[tuple[float, int], ...] = ((5, 10), (2, 5), (1, 2))
_IMPRESSION_TIERS: tuple[tuple[float, int], ...] = ((1000, 5), (500, 3), (100, 1))
_ABSOLUTE_CAP = 30

# ── Benchmark-exceedance bonus ─────────────────────────────────────────────
_BEAT_IMPRESSIONS = 3
_BEAT_ENGAGEMENT = 4
_BEAT_RATE = 3
_BENCHMARK_CAP = 10

_FALLBACK_CAP = 50
_LOW_ENGAGEMENT = 2
_LOW_ENGAGEMENT_CAP = 40

_SCORE_TIERS: tuple[tuple[int, str], ...] = (
    (80, "excellent"),
    (60, "good"),
    (40, "average"),
    (20, "below average"),
)


def _tier_points(value: float, tiers: tuple[tuple[float, int], ...]) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def _log_ratio(value: float, top: float) -> float:
    if top <= 0:
        return 0.0
    denominator = math.log10(1 + top)
    if denominator <= 0:
        return 0.0
    return min(1.0, math.log10(1 + value) / denominator)


def _fallback(post: PostWithMetrics) -> int:
    m = post.metrics
    # cap before flooring: a huge rate overflows to inf
    raw = min(_FALLBACK_CAP, m.engagement_rate * 2 + min(m.engagement / 100, 30))
    return max(0, math.floor(raw))


def score(
    post: PostWithMetrics,
    all_posts: Iterable[PostWithMetrics],
    benchmarks: Benchmarks | None = None,
) -> int:
    """Score *post* from 0 to 100 against its segment within *all_posts*.

    *benchmarks* may be supplied when the caller already computed them for the
    post's segment; *all_posts* is ignored in that case.
    """
    if benchmarks is None:
        benchmarks = benchmarks_for(all_posts, post.platform, post.post_type)

    if benchmarks.is_empty:
        return _fallback(post)

    m = post.metrics
    b = benchmarks

    impressions_ratio = _log_ratio(m.impressions, b.top_impressions)
    engagement_ratio = _log_ratio(m.engagement, b.top_engagement)
    rate_ratio = (
        min(1.0, m.engagement_rate / b.top_engagement_rate)
        if b.top_engagement_rate > 0
        else 0.0
    )
    relative = (
        impressions_ratio * _W_IMPRESSIONS
        + engagement_ratio * _W_ENGAGEMENT
        + rate_ratio * _W_RATE
    ) * _RELATIVE_POINTS

    absolute = min(
        _ABSOLUTE_CAP,
        _tier_points(m.engagement, _ENGAGEMENT_TIERS)
        + _tier_points(m.engagement_rate, _RATE_TIERS)
        + _tier_points(m.impressions, _IMPRESSION_TIERS),
    )

    beat = 0
    if b.top_impressions > 0 and m.impressions >= b.top_impressions:
        beat += _BEAT_IMPRESSIONS
    if b.top_engagement > 0 and m.engagement >= b.top_engagement:
        beat += _BEAT_ENGAGEMENT
    if b.top_engagement_rate > 0 and m.engagement_rate >= b.top_engagement_rate:
        beat += _BEAT_RATE
    beat = min(_BENCHMARK_CAP, beat)

    final = relative + absolute + beat
    if m.engagement < _LOW_ENGAGEMENT:
        final = min(_LOW_ENGAGEMENT_CAP, final)

    final = min(100.0, max(0.0, final))
    return int(math.floor(final + 0.5))


def score_tier(value: float) -> str:
    """Map a score to a qualitative band (``excellent`` … ``poor``)."""
    clamped = max(0, min(100, value))
    for threshold, label in _SCORE_TIERS:
        if clamped >= threshold:
            return label
    return "poor"


def tag_posts(posts: Iterable[RawPost | Mapping[str, Any]]) -> list[PostWithMetrics]:
    """Classify raw posts, returning them with a ``post_type`` attached.

    Mappings are validated leniently; anything else is skipped with a warning.
    """
    tagged: list[PostWithMetrics] = []
    for raw in posts:
        if isinstance(raw, Mapping):
            raw = RawPost.model_validate(dict(raw))
        elif not isinstance(raw, RawPost):
            logger.warning("Skipping unsupported post entry of type %s", type(raw).__name__)
            continue
        tagged.append(
            PostWithMetrics(
                id=raw.id,
                platform=raw.platform,
                post_type=classify(raw.platform, raw.metadata, raw.media_urls),
                metrics=raw.metrics,
            )
        )
    return tagged


def score_each(posts: Sequence[PostWithMetrics]) -> list[int]:
    """Score every post against the whole collection, in input order."""
    by_segment = benchmarks_by_segment(posts)
    return [
        score(post, posts, benchmarks=by_segment[segment_key(post.platform, post.post_type)])
        for post in posts
    ]


def score_all(posts: Iterable[RawPost | Mapping[str, Any]]) -> dict[str, int]:
    """Classify and score a batch; return ``{post_id: score}``.

    Each post is benchmarked against every post in the batch, itself included.
    """
    tagged = tag_posts(posts)
    if not tagged:
        return {}

    scores: dict[str, int] = {}
    for post, value in zip(tagged, score_each(tagged)):
        scores[post.id] = value

    logger.info(
        "Scored %d posts across %d segments; top score=%d",
        len(tagged),
        len({segment_key(p.platform, p.post_type) for p in tagged}),
        max(scores.values()),
    )
    return scores
