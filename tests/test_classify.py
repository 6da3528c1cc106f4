"""Unit tests for content-type classification."""

from postscore.classify import classify
from postscore.models import PostMetadata


class TestExplicitType:
    def test_content_type_wins(self) -> None:
        assert classify("instagram", {"contentType": "Reel"}, []) == "reel"

    def test_override_beats_platform_rules(self) -> None:
        assert classify("youtube", {"contentType": "Short"}, ["a.mp4"]) == "short"

    def test_key_order(self) -> None:
        meta = {"postType": "c", "format": "B", "contentType": ""}
        assert classify("facebook", meta, []) == "b"

    def test_post_type_key(self) -> None:
        assert classify("linkedin", {"postType": "Article"}, []) == "article"

    def test_accepts_model(self) -> None:
        meta = PostMetadata(content_type="Carousel")
        assert classify("x", meta, []) == "carousel"


class TestInstagram:
    def test_single_video_is_reel(self) -> None:
        assert classify("instagram", {}, ["a.mp4"]) == "reel"

    def test_multi_image_is_carousel(self) -> None:
        assert classify("instagram", {}, ["a.jpg", "b.jpg"]) == "carousel"

    def test_single_image_is_feed(self) -> None:
        assert classify("Instagram", {}, ["a.jpg"]) == "feed"

    def test_story_from_media_type(self) -> None:
        assert classify("instagram", {"mediaType": "STORY_IMAGE"}, ["a.jpg", "b.jpg"]) == "story"

    def test_story_flag_beats_reel_flag(self) -> None:
        assert classify("instagram", {"isStory": True, "isReel": True}, []) == "story"

    def test_reel_flag_beats_carousel(self) -> None:
        assert classify("instagram", {"isReel": True}, ["a.jpg", "b.jpg"]) == "reel"


class TestOtherPlatforms:
    def test_facebook_video(self) -> None:
        assert classify("facebook", {}, ["a.mp4"]) == "video"

    def test_facebook_multi_image_is_feed(self) -> None:
        assert classify("facebook", {}, ["a.jpg", "b.jpg", "c.jpg"]) == "feed"

    def test_facebook_story(self) -> None:
        assert classify("facebook", {"isStory": True}, ["a.mp4"]) == "story"

    def test_x_thread_flag(self) -> None:
        assert classify("x", {"isThread": True}, []) == "thread"

    def test_twitter_many_media_is_thread(self) -> None:
        urls = [f"{i}.jpg" for i in range(5)]
        assert classify("twitter", {}, urls) == "thread"

    def test_x_default_post(self) -> None:
        assert classify("x", {}, ["1.jpg", "2.jpg", "3.jpg", "4.jpg"]) == "post"

    def test_tiktok(self) -> None:
        assert classify("tiktok", {}, ["a.mp4"]) == "video"
        assert classify("tiktok", {}, ["a.jpg", "b.jpg"]) == "carousel"

    def test_youtube_always_video(self) -> None:
        assert classify("youtube", {}, []) == "video"

    def test_linkedin_always_post(self) -> None:
        assert classify("linkedin", {}, ["a.mp4"]) == "post"


class TestDefaultBranch:
    def test_unknown_single_image(self) -> None:
        assert classify("unknownplatform", {}, ["a.jpg"]) == "post"

    def test_unknown_video_marker(self) -> None:
        assert classify("pinterest", {}, ["https://cdn.example.com/VIDEO/123"]) == "video"

    def test_unknown_multi_image(self) -> None:
        assert classify("threads", {}, ["a.jpg", "b.png"]) == "carousel"

    def test_missing_inputs(self) -> None:
        assert classify(None, None, None) == "post"

    def test_null_media_urls_counted_not_inspected(self) -> None:
        assert classify("instagram", {}, [None, None]) == "carousel"
        assert classify("instagram", {}, [None]) == "feed"
