"""Turn raw analytics records into :class:`PostMetrics`.

Publishing APIs disagree on field names (``likes`` vs ``like_count`` vs
``favorites`` …), so each counter is read from the first alias present.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from postscore.models import PostMetrics, to_number

logger = logging.getLogger(__name__)

_LIKE_KEYS = (
    "likes", "like_count", "likeCount", "reactions", "reaction_count",
    "reactionCount", "favorites", "favorite_count",
)
_COMMENT_KEYS = (
    "comments", "comment_count", "commentCount", "replies", "reply_count",
    "replyCount",
)
_SHARE_KEYS = (
    "shares", "share_count", "shareCount", "retweets", "retweet_count",
    "retweetCount", "reposts", "repost_count",
)
_IMPRESSION_KEYS = (
    "impressions", "impression_count", "impressionCount", "views",
    "view_count", "viewCount",
)
_RATE_KEYS = ("engagementRate", "engagement_rate")
_POST_ID_KEYS = ("post_id", "postId")


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def engagement_rate(engagement: float, impressions: float) -> float:
    """Engagement as a percentage of impressions (0 when there are none)."""
    if impressions <= 0:
        return 0.0
    return engagement / impressions * 100


def _counters(record: Mapping[str, Any]) -> tuple[float, float, float, float]:
    return (
        to_number(_first_present(record, _LIKE_KEYS)),
        to_number(_first_present(record, _COMMENT_KEYS)),
        to_number(_first_present(record, _SHARE_KEYS)),
        to_number(_first_present(record, _IMPRESSION_KEYS)),
    )


def extract_metrics(record: Mapping[str, Any]) -> PostMetrics:
    """Build metrics from one analytics record.

    An explicit ``engagement`` or engagement-rate field is used as-is;
    otherwise engagement is likes + comments + shares and the rate is derived
    from impressions.
    """
    likes, comments, shares, impressions = _counters(record)

    explicit_engagement = record.get("engagement")
    if explicit_engagement is not None:
        engagement = to_number(explicit_engagement)
    else:
        engagement = likes + comments + shares

    explicit_rate = _first_present(record, _RATE_KEYS)
    if explicit_rate is not None:
        rate = to_number(explicit_rate)
    else:
        rate = engagement_rate(engagement, impressions)

    return PostMetrics(impressions=impressions, engagement=engagement, engagement_rate=rate)


def aggregate_by_post(records: Iterable[Mapping[str, Any]]) -> dict[str, PostMetrics]:
    """Sum daily analytics rows per post and derive each post's rate.

    Rows without a ``post_id`` are ignored.
    """
    totals: dict[str, list[float]] = {}
    skipped = 0
    for record in records:
        post_id = _first_present(record, _POST_ID_KEYS)
        if post_id is None or post_id == "":
            skipped += 1
            continue
        likes, comments, shares, impressions = _counters(record)
        acc = totals.setdefault(str(post_id), [0.0, 0.0])
        acc[0] += likes + comments + shares
        acc[1] += impressions

    if skipped:
        logger.warning("Ignored %d analytics rows without a post id", skipped)

    return {
        post_id: PostMetrics(
            impressions=impressions,
            engagement=engagement,
            engagement_rate=engagement_rate(engagement, impressions),
        )
        for post_id, (engagement, impressions) in totals.items()
    }
