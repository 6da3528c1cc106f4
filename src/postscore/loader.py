"""Load posts to score from a YAML or JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from postscore.metrics import aggregate_by_post, extract_metrics
from postscore.models import PostMetrics, RawPost

logger = logging.getLogger(__name__)


def _entries(doc: Any) -> list[Any]:
    if isinstance(doc, dict):
        doc = doc.get("posts", [])
    if doc is None:
        return []
    if not isinstance(doc, list):
        logger.warning("Expected a list of posts, got %s; nothing to load.", type(doc).__name__)
        return []
    return doc


def _daily_metrics(post_id: str, rows: list[Any]) -> PostMetrics:
    """Sum a post's daily analytics rows into one set of metrics."""
    tagged = [{**row, "post_id": post_id} for row in rows if isinstance(row, dict)]
    return aggregate_by_post(tagged).get(post_id, PostMetrics())


def _metrics_for(entry: dict[str, Any]) -> PostMetrics:
    analytics = entry.get("analytics")
    if isinstance(analytics, list):
        return _daily_metrics(str(entry["id"]), analytics)
    if isinstance(analytics, dict):
        return extract_metrics(analytics)
    return extract_metrics(entry)


def _parse(p: Path) -> Any:
    with open(p, encoding="utf-8") as fh:
        if p.suffix.lower() == ".json":
            return json.load(fh)
        return yaml.safe_load(fh)


def load_posts(path: str | Path) -> list[RawPost]:
    """Parse *path* and return the posts it describes.

    ``.json`` files are read with :mod:`json`; anything else goes through
    ``yaml.safe_load``. The file holds either a list of posts or a mapping with
    a ``posts`` list, and each post needs an ``id``. Metrics are taken from a
    ``metrics`` mapping when present. Otherwise they come from ``analytics``
    (one record, or a list of daily rows that get summed) or from the post's
    own counters (``likes``, ``views`` …).
    """
    p = Path(path)
    doc = _parse(p)

    posts: list[RawPost] = []
    for index, entry in enumerate(_entries(doc)):
        if not isinstance(entry, dict):
            logger.warning("Skipping entry #%d in %s: not a mapping", index, p)
            continue
        if entry.get("id") in (None, ""):
            logger.warning("Skipping entry #%d in %s: missing id", index, p)
            continue

        data = dict(entry)
        if not isinstance(data.get("metrics"), dict):
            data["metrics"] = _metrics_for(data)
        posts.append(RawPost.model_validate(data))

    logger.info("Loaded %d posts from %s", len(posts), p)
    return posts
