"""Per-segment benchmarks derived from a brand's best posts.

A segment is every post sharing a platform and content type (both compared
case-insensitively). Benchmarks come from the segment's top ``TOP_N`` posts,
ranked by a composite of reach-weighted engagement rate plus raw engagement,
and are floored so a thin or quiet segment cannot produce a tiny denominator.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from postscore.models import Benchmarks, PostMetrics, PostWithMetrics

logger = logging.getLogger(__name__)

TOP_N = 10

# ── Floors ─────────────────────────────────────────────────────────────────
MIN_IMPRESSIONS = 10
MIN_ENGAGEMENT = 5
MIN_ENGAGEMENT_RATE = 0.5


def segment_key(platform: str | None, post_type: str | None) -> tuple[str, str]:
    return (str(platform or "").lower(), str(post_type or "").lower())


def composite(metrics: PostMetrics) -> float:
    """Ranking key used only to pick the reference set."""
    return metrics.impressions * (metrics.engagement_rate / 100) + metrics.engagement


def _compute(segment: Sequence[PostWithMetrics]) -> Benchmarks:
    if not segment:
        return Benchmarks()

    # sorted() is stable, so equal composites keep their input order
    reference = sorted(segment, key=lambda p: composite(p.metrics), reverse=True)[:TOP_N]
    n = len(reference)

    impressions = [p.metrics.impressions for p in reference]
    engagement = [p.metrics.engagement for p in reference]
    rates = [p.metrics.engagement_rate for p in reference]

    return Benchmarks(
        top_impressions=max(max(impressions), MIN_IMPRESSIONS),
        top_engagement=max(max(engagement), MIN_ENGAGEMENT),
        top_engagement_rate=max(max(rates), MIN_ENGAGEMENT_RATE),
        avg_impressions=max(sum(impressions) / n, MIN_IMPRESSIONS),
        avg_engagement=max(sum(engagement) / n, MIN_ENGAGEMENT),
        avg_engagement_rate=max(sum(rates) / n, MIN_ENGAGEMENT_RATE),
    )


def benchmarks_for(
    posts: Iterable[PostWithMetrics],
    platform: str | None,
    post_type: str | None,
) -> Benchmarks:
    """Compute benchmarks for the (*platform*, *post_type*) segment of *posts*.

    Returns all-zero benchmarks when the segment is empty.
    """
    key = segment_key(platform, post_type)
    segment = [p for p in posts if segment_key(p.platform, p.post_type) == key]
    return _compute(segment)


def benchmarks_by_segment(
    posts: Iterable[PostWithMetrics],
) -> dict[tuple[str, str], Benchmarks]:
    """Compute benchmarks once for every segment present in *posts*."""
    groups: dict[tuple[str, str], list[PostWithMetrics]] = defaultdict(list)
    for post in posts:
        groups[segment_key(post.platform, post.post_type)].append(post)

    result = {key: _compute(items) for key, items in groups.items()}
    logger.debug("Computed benchmarks for %d segments", len(result))
    return result
