"""Unit tests for loading posts from disk."""

import json
from pathlib import Path

import pytest

from postscore.loader import load_posts


class TestLoadPosts:
    def test_yaml_mapping_with_posts(self, tmp_path: Path) -> None:
        path = tmp_path / "posts.yml"
        path.write_text(
            "posts:\n"
            "  - id: p1\n"
            "    platform: instagram\n"
            "    mediaUrls: [a.mp4]\n"
            "    metrics: {impressions: 1200, engagement: 40, engagementRate: 3.3}\n"
            "  - id: p2\n"
            "    platform: x\n"
            "    metadata: {isThread: true}\n"
            "    likes: 4\n"
            "    replies: 1\n"
            "    views: 250\n"
        )
        posts = load_posts(path)
        assert [p.id for p in posts] == ["p1", "p2"]
        assert posts[0].metrics.impressions == 1200
        assert posts[0].media_urls == ["a.mp4"]
        assert posts[1].metadata.is_thread
        assert posts[1].metrics.engagement == 5
        assert posts[1].metrics.engagement_rate == pytest.approx(2.0)

    def test_json_list(self, tmp_path: Path) -> None:
        path = tmp_path / "posts.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": 17,
                        "platform": "facebook",
                        "analytics": {"reactions": 8, "impressions": 400},
                    }
                ]
            )
        )
        posts = load_posts(path)
        assert len(posts) == 1
        assert posts[0].id == "17"
        assert posts[0].metrics.engagement == 8

    def test_tab_indented_json(self, tmp_path: Path) -> None:
        path = tmp_path / "posts.json"
        rows = [{"id": "a", "platform": "instagram", "likes": 12, "impressions": 300}]
        path.write_text(json.dumps(rows, indent="\t"))
        posts = load_posts(path)
        assert [p.id for p in posts] == ["a"]
        assert posts[0].metrics.engagement == 12

    def test_daily_analytics_rows_are_summed(self, tmp_path: Path) -> None:
        path = tmp_path / "posts.yml"
        path.write_text(
            "- id: p1\n"
            "  platform: facebook\n"
            "  analytics:\n"
            "    - {date: 2026-10-01, likes: 6, comments: 2, impressions: 100}\n"
            "    - {date: 2026-10-02, likes: 1, shares: 1, impressions: 100}\n"
            "    - not a row\n"
        )
        posts = load_posts(path)
        assert posts[0].metrics.engagement == 10
        assert posts[0].metrics.impressions == 200
        assert posts[0].metrics.engagement_rate == pytest.approx(5.0)

    def test_empty_daily_analytics(self, tmp_path: Path) -> None:
        path = tmp_path / "posts.yml"
        path.write_text("- id: p1\n  analytics: []\n")
        assert load_posts(path)[0].metrics.engagement == 0

    def test_skips_bad_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "posts.yml"
        path.write_text("- just a string\n- platform: instagram\n- id: ok\n")
        posts = load_posts(path)
        assert [p.id for p in posts] == ["ok"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_posts(path) == []

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_posts(tmp_path / "nope.yml")
