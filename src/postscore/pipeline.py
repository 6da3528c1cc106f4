"""Pipeline orchestration: wires load → classify → benchmark → score → report."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from postscore import config
from postscore.loader import load_posts
from postscore.report import build_scored_posts, write_report

logger = logging.getLogger(__name__)


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_scoring(
    input_path: Path,
    fmt: str | None = None,
    output_dir: Path | None = None,
    dry_run: bool = False,
) -> Path | None:
    """Score every post in *input_path* and write a report.

    Returns the report path, or ``None`` when nothing was written.
    """
    fmt = fmt or config.REPORT_FORMAT
    output_dir = output_dir or config.OUTPUT_DIR
    logger.info("=== postscore start [input=%s] ===", input_path)

    # ── 1. Load posts ─────────────────────────────────────────────────
    posts = load_posts(input_path)
    if not posts:
        logger.warning("No posts loaded from %s; nothing to score.", input_path)
        return None

    # ── 2. Classify + score ───────────────────────────────────────────
    scored = build_scored_posts(posts)
    for post in scored[: config.TOP_LOG]:
        logger.info(
            "  [%3d %s] %s/%s %s",
            post.score, post.tier, post.platform, post.post_type, post.id,
        )

    if dry_run:
        logger.info("Dry-run mode, skipping report write.")
        return None

    # ── 3. Report ─────────────────────────────────────────────────────
    out_path = write_report(scored, output_dir=output_dir, fmt=fmt, stem=input_path.stem + "-scores")
    logger.info("=== postscore done: %s ===", out_path)
    return out_path
