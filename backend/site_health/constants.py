"""Centralized scoring constants.

This module is the SINGLE SOURCE OF TRUTH for every threshold, weight and
curve used by the Basic Scoring Engine.  Each number is a product decision
or an industry-standard cutoff (Core Web Vitals "good" / "poor" limits).
LOCKED: changing any value changes every stored score.
"""

from __future__ import annotations

# ── Lower-is-better curve ───────────────────────────────────────────────
# v <= good → 100, good..ok → 100-75, ok..bad → 75-50, v > bad → floor.

MISSING_METRIC_SCORE: float = 50.0
CURVE_TOP: float = 100.0
CURVE_OK: float = 75.0
CURVE_BAD: float = 50.0
CURVE_FLOOR: float = 20.0

# (good, ok, bad)
LCP_THRESHOLDS_MS: tuple[float, float, float] = (2500.0, 4000.0, 6000.0)
INP_THRESHOLDS_MS: tuple[float, float, float] = (200.0, 500.0, 800.0)
TTFB_THRESHOLDS_MS: tuple[float, float, float] = (800.0, 1800.0, 2500.0)
PAGE_WEIGHT_THRESHOLDS_KB: tuple[float, float, float] = (1500.0, 2500.0, 4000.0)
REQUEST_THRESHOLDS: tuple[float, float, float] = (60.0, 80.0, 120.0)

# ── CLS curve ───────────────────────────────────────────────────────────
CLS_GOOD: float = 0.10
CLS_POOR: float = 0.25
CLS_AT_POOR: float = 60.0   # score reached at exactly CLS_POOR
CLS_FLOOR: float = 25.0     # any CLS beyond CLS_POOR

# ── Subscore blends (weights sum to 1.0 within each) ────────────────────
CWV_WEIGHTS: dict[str, float] = {"lcp": 0.5, "inp": 0.3, "cls": 0.2}
WEIGHT_WEIGHTS: dict[str, float] = {"page_weight": 0.7, "requests": 0.3}

# (weight, score when the check explicitly fails)
MOBILE_CHECKS: dict[str, tuple[float, float]] = {
    "viewport_meta": (0.5, 40.0),
    "tap_targets_ok": (0.2, 60.0),
    "cta_above_fold": (0.3, 70.0),
}
SEO_CHECKS: dict[str, tuple[float, float]] = {
    "indexable": (0.35, 30.0),
    "https": (0.25, 40.0),
    "title_ok": (0.2, 70.0),
    "meta_ok": (0.2, 70.0),
}

# ── Raw score blend ─────────────────────────────────────────────────────
# Core Web Vitals dominate; mobile-first business priority.
RAW_WEIGHTS: dict[str, float] = {
    "cwv": 0.45,
    "weight": 0.20,
    "ttfb": 0.15,
    "mobile": 0.10,
    "seo": 0.10,
}

# ── Final compression ───────────────────────────────────────────────────
# final = 100 * (after_penalties / 100) ** FINAL_EXPONENT
# Exponent > 1 deflates the top of the range (90 → 88, 50 → 42).
FINAL_EXPONENT: float = 1.25

# ── Labels ──────────────────────────────────────────────────────────────
LABEL_GREEN: str = "🟢"
LABEL_YELLOW: str = "🟡"
LABEL_RED: str = "🔴"
GREEN_MIN_SCORE: int = 88   # also requires zero gates
YELLOW_MIN_SCORE: int = 70

# ── Summary bands (per category) ────────────────────────────────────────
BAND_GOOD_MIN: float = 80.0
BAND_FAIR_MIN: float = 60.0
