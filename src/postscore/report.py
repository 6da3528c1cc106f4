"""Render a scored batch as JSON, Markdown or a styled HTML page."""

from __future__ import annotations

import html
import json
import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import markdown

from postscore.benchmarks import benchmarks_by_segment
from postscore.models import RawPost, ScoredPost
from postscore.score import score_each, score_tier, tag_posts

logger = logging.getLogger(__name__)

FORMATS: dict[str, str] = {"json": "json", "markdown": "md", "html": "html"}


class ReportError(Exception):
    """Raised when a report cannot be rendered in the requested format."""


_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body style="margin:0; padding:32px 16px; background:#eef1f5;
             font-family:system-ui,sans-serif; font-size:14px; color:#23272f;">
<main style="max-width:1080px; margin:0 auto; background:#fff;
             border-radius:6px; box-shadow:0 1px 3px rgba(0,0,0,.12);
             padding:24px 32px;">
{body}
</main>
</body>
</html>
"""

# Per-tag inline styles; merged into any style the markdown tables emit
_TAG_STYLES: dict[str, str] = {
    "h1": "font-size:24px; margin:0 0 4px 0; color:#1b3a5c;",
    "h2": "font-size:17px; margin:28px 0 10px 0; color:#1b3a5c; text-transform:uppercase;",
    "table": "border-collapse:collapse; width:100%; font-variant-numeric:tabular-nums;",
    "th": "background:#f3f5f8; border-bottom:1px solid #c9d1db; padding:5px 10px;",
    "td": "border-bottom:1px solid #e6e9ee; padding:5px 10px;",
    "em": "color:#6b7380; font-size:12px;",
}

_TAG_RE = re.compile(r"<(%s)(\s[^>]*)?>" % "|".join(_TAG_STYLES))
_STYLE_ATTR_RE = re.compile(r'style="([^"]*)"')


def _inline_styles(body: str) -> str:
    def _apply(match: re.Match[str]) -> str:
        tag, attrs = match.group(1), match.group(2) or ""
        style = _TAG_STYLES[tag]
        if _STYLE_ATTR_RE.search(attrs):
            attrs = _STYLE_ATTR_RE.sub(lambda m: f'style="{style} {m.group(1)}"', attrs, count=1)
        else:
            attrs = f' style="{style}"{attrs}'
        return f"<{tag}{attrs}>"

    return _TAG_RE.sub(_apply, body)


def _md_cell(value: object) -> str:
    return str(value).replace("|", "\\|")


def build_scored_posts(posts: Iterable[RawPost | Mapping[str, Any]]) -> list[ScoredPost]:
    """Classify and score *posts*, best first (input order breaks ties)."""
    tagged = tag_posts(posts)
    scored = [
        ScoredPost(
            id=post.id,
            platform=post.platform,
            post_type=post.post_type,
            metrics=post.metrics,
            score=value,
            tier=score_tier(value),
        )
        for post, value in zip(tagged, score_each(tagged))
    ]
    scored.sort(key=lambda p: p.score, reverse=True)
    return scored


def render_json(scored: Sequence[ScoredPost]) -> str:
    payload = {
        "scores": {p.id: p.score for p in scored},
        "posts": [p.model_dump(mode="json") for p in scored],
    }
    return json.dumps(payload, indent=2)


def _markdown(
    scored: Sequence[ScoredPost],
    title: str,
    escape: Callable[[str], str],
) -> str:
    def cell(value: object) -> str:
        return _md_cell(escape(str(value)))

    now = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")
    lines: list[str] = [f"# {escape(title)}", "", f"*Generated {now}*", ""]

    if not scored:
        lines.append("No posts to score.")
        return "\n".join(lines) + "\n"

    avg = sum(p.score for p in scored) / len(scored)
    lines += [f"Scored **{len(scored)}** posts; average score **{avg:.1f}**.", ""]

    lines += [
        "## Posts",
        "",
        "| # | Post | Platform | Type | Impressions | Engagement | Rate | Score | Tier |",
        "|---|---|---|---|---:|---:|---:|---:|---|",
    ]
    for i, p in enumerate(scored, start=1):
        m = p.metrics
        lines.append(
            f"| {i} | {cell(p.id)} | {cell(p.platform)} | {cell(p.post_type)} "
            f"| {m.impressions:,} | {m.engagement:,} | {m.engagement_rate:.2f}% "
            f"| {p.score} | {p.tier} |"
        )

    lines += [
        "",
        "## Benchmarks",
        "",
        "| Platform | Type | Top impressions | Top engagement | Top rate "
        "| Avg impressions | Avg engagement | Avg rate |",
        "|---|---|---:|---:|---:|---:|---:|---:|",
    ]
    for (platform, post_type), b in sorted(benchmarks_by_segment(scored).items()):
        lines.append(
            f"| {cell(platform)} | {cell(post_type)} | {b.top_impressions:,.0f} "
            f"| {b.top_engagement:,.0f} | {b.top_engagement_rate:.2f}% "
            f"| {b.avg_impressions:,.1f} | {b.avg_engagement:,.1f} "
            f"| {b.avg_engagement_rate:.2f}% |"
        )

    return "\n".join(lines) + "\n"


def render_markdown(scored: Sequence[ScoredPost], title: str = "Post performance") -> str:
    return _markdown(scored, title, escape=str)


def render_html(scored: Sequence[ScoredPost], title: str = "Post performance") -> str:
    body = markdown.markdown(
        _markdown(scored, title, escape=html.escape),
        extensions=["tables"],
        output_format="html",
    )
    return _PAGE.format(title=html.escape(title), body=_inline_styles(body))


def render(scored: Sequence[ScoredPost], fmt: str) -> str:
    if fmt == "json":
        return render_json(scored)
    if fmt == "markdown":
        return render_markdown(scored)
    if fmt == "html":
        return render_html(scored)
    raise ReportError(f"Unknown report format '{fmt}' (expected one of {', '.join(FORMATS)})")


def write_report(
    scored: Sequence[ScoredPost],
    output_dir: Path,
    fmt: str = "markdown",
    stem: str | None = None,
) -> Path:
    """Render *scored* and write it under *output_dir*; return the file path."""
    body = render(scored, fmt)
    if stem is None:
        stem = "scores-" + datetime.now(UTC).strftime("%Y%m%d-%H%M%S")

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / f"{stem}.{FORMATS[fmt]}"
    out_path.write_text(body, encoding="utf-8")
    logger.info("Wrote %s report (%d posts) to %s", fmt, len(scored), out_path)
    return out_path
