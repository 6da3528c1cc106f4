"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[2]
OUTPUT_DIR: Path = Path(os.getenv("POSTSCORE_OUTPUT_DIR", str(PROJECT_ROOT / "out")))

# ── Reporting ──────────────────────────────────────────────────────────────
REPORT_FORMAT: str = os.getenv("POSTSCORE_REPORT_FORMAT", "markdown").lower()
TOP_LOG: int = int(os.getenv("POSTSCORE_TOP_LOG", "10"))

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("POSTSCORE_LOG_LEVEL", "INFO").upper()
