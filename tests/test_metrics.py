"""Unit tests for analytics metric extraction."""

import pytest

from postscore.metrics import aggregate_by_post, engagement_rate, extract_metrics
from postscore.models import PostMetrics


class TestExtractMetrics:
    def test_canonical_fields(self) -> None:
        m = extract_metrics({"likes": 10, "comments": 3, "shares": 2, "impressions": 500})
        assert m.engagement == 15
        assert m.impressions == 500
        assert m.engagement_rate == pytest.approx(3.0)

    def test_aliases(self) -> None:
        record = {
            "like_count": 7,
            "replyCount": 2,
            "retweets": 1,
            "views": 1000,
        }
        m = extract_metrics(record)
        assert m.engagement == 10
        assert m.impressions == 1000
        assert m.engagement_rate == pytest.approx(1.0)

    def test_first_present_alias_wins(self) -> None:
        m = extract_metrics({"likes": None, "like_count": 4, "reactions": 99})
        assert m.engagement == 4

    def test_explicit_values_are_kept(self) -> None:
        record = {"likes": 10, "engagement": 42, "impressions": 100, "engagement_rate": "7.5%"}
        m = extract_metrics(record)
        assert m.engagement == 42
        assert m.engagement_rate == pytest.approx(7.5)

    def test_no_impressions_zero_rate(self) -> None:
        m = extract_metrics({"likes": 10})
        assert m.engagement == 10
        assert m.engagement_rate == 0.0

    def test_garbage_coerces_to_zero(self) -> None:
        m = extract_metrics({"likes": "lots", "views": float("nan"), "shares": -4})
        assert m == PostMetrics()


class TestEngagementRate:
    def test_zero_impressions(self) -> None:
        assert engagement_rate(10, 0) == 0.0

    def test_percentage(self) -> None:
        assert engagement_rate(5, 200) == pytest.approx(2.5)


class TestAggregateByPost:
    def test_sums_daily_rows(self) -> None:
        rows = [
            {"post_id": "a", "likes": 5, "comments": 1, "impressions": 100},
            {"post_id": "a", "likes": 3, "shares": 1, "impressions": 100},
            {"postId": "b", "likes": 2, "impressions": 0},
        ]
        result = aggregate_by_post(rows)
        assert result["a"].engagement == 10
        assert result["a"].impressions == 200
        assert result["a"].engagement_rate == pytest.approx(5.0)
        assert result["b"].engagement_rate == 0.0

    def test_rows_without_id_ignored(self) -> None:
        assert aggregate_by_post([{"likes": 5}]) == {}
