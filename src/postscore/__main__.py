"""CLI entry-point: ``python -m postscore score`` / ``python -m postscore classify``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from postscore import config
from postscore.classify import classify
from postscore.pipeline import run_scoring, setup_logging
from postscore.report import FORMATS, ReportError

logger = logging.getLogger(__name__)


def _score(args: argparse.Namespace) -> None:
    setup_logging()
    input_path = Path(args.input)
    try:
        run_scoring(
            input_path,
            fmt=args.format,
            output_dir=Path(args.output_dir) if args.output_dir else None,
            dry_run=args.dry_run,
        )
    except FileNotFoundError:
        logger.error("Input file not found: %s", input_path)
        sys.exit(1)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        logger.error("Could not parse %s: %s", input_path, exc)
        sys.exit(1)
    except ReportError as exc:
        logger.error("%s", exc)
        sys.exit(1)


def _classify(args: argparse.Namespace) -> None:
    metadata = {
        "contentType": args.content_type,
        "isStory": args.story,
        "isReel": args.reel,
        "isThread": args.thread,
    }
    print(classify(args.platform, metadata, args.media_urls))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="postscore",
        description="Score social posts 0-100 against the brand's own top performers.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── score ──────────────────────────────────────────────────────────
    score_parser = sub.add_parser("score", help="Score every post in a YAML/JSON file.")
    score_parser.add_argument("input", help="Path to the posts file.")
    score_parser.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help=f"Report format (default: {config.REPORT_FORMAT}).",
    )
    score_parser.add_argument(
        "--output-dir",
        default=None,
        help=f"Where to write the report (default: {config.OUTPUT_DIR}).",
    )
    score_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Score and log the top posts but skip writing the report.",
    )

    # ── classify ───────────────────────────────────────────────────────
    classify_parser = sub.add_parser("classify", help="Print the content type for a post.")
    classify_parser.add_argument("platform", help="e.g. instagram, facebook, x, tiktok.")
    classify_parser.add_argument("media_urls", nargs="*", help="Media URLs attached to the post.")
    classify_parser.add_argument("--content-type", default=None, help="Explicit type override.")
    classify_parser.add_argument("--story", action="store_true", help="Flag the post as a story.")
    classify_parser.add_argument("--reel", action="store_true", help="Flag the post as a reel.")
    classify_parser.add_argument("--thread", action="store_true", help="Flag the post as a thread.")

    args = parser.parse_args(argv)

    if args.command == "score":
        _score(args)
    elif args.command == "classify":
        _classify(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
