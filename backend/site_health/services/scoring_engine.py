"""Basic Scoring Engine.

Converts canonical ``BasicInputs`` into a bounded, explainable
``ScoreDetail``:

  subscores → raw → gates (ceiling) → penalties (additive) → compression

Rules
-----
- NO API calls
- NO DB writes
- Missing data is scored neutral (50), never rewarded or punished
- Gates and penalties fire only on explicit failures or exceeded thresholds
- Pure deterministic math; total over every valid ``BasicInputs``
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..constants import (
    CLS_AT_POOR,
    CLS_FLOOR,
    CLS_GOOD,
    CLS_POOR,
    CURVE_BAD,
    CURVE_FLOOR,
    CURVE_OK,
    CURVE_TOP,
    CWV_WEIGHTS,
    FINAL_EXPONENT,
    GREEN_MIN_SCORE,
    INP_THRESHOLDS_MS,
    LABEL_GREEN,
    LABEL_RED,
    LABEL_YELLOW,
    LCP_THRESHOLDS_MS,
    MISSING_METRIC_SCORE,
    MOBILE_CHECKS,
    PAGE_WEIGHT_THRESHOLDS_KB,
    RAW_WEIGHTS,
    REQUEST_THRESHOLDS,
    SEO_CHECKS,
    TTFB_THRESHOLDS_MS,
    WEIGHT_WEIGHTS,
    YELLOW_MIN_SCORE,
)
from ..schemas.basic_inputs_schema import BasicInputs
from ..schemas.score_schema import GateResult, Penalty, ScoreDetail, Subscores

logger = logging.getLogger(__name__)


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def _lerp(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    """Linear interpolation of *x* from [x0, x1] onto [y0, y1], saturating."""
    if x <= x0:
        return y0
    if x >= x1:
        return y1
    t = (x - x0) / (x1 - x0)
    return y0 + t * (y1 - y0)


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _exceeds(value: Optional[float], limit: float) -> bool:
    """True only for a known value strictly above *limit*."""
    return value is not None and value > limit


# ===================================================================== #
#  Scoring curves                                                         #
# ===================================================================== #

def score_lower_better(
    value: Optional[float],
    good: float,
    ok: float,
    bad: float,
) -> float:
    """Score a lower-is-better metric on a piecewise-linear curve.

    ``<= good`` → 100, ``good..ok`` → 100-75, ``ok..bad`` → 75-50 and
    anything beyond ``bad`` collapses to a flat 20.  ``None`` → 50.
    """
    if value is None:
        return MISSING_METRIC_SCORE
    if value <= good:
        return CURVE_TOP
    if value <= ok:
        return _lerp(value, good, ok, CURVE_TOP, CURVE_OK)
    if value <= bad:
        return _lerp(value, ok, bad, CURVE_OK, CURVE_BAD)
    return CURVE_FLOOR


def score_cls(value: Optional[float]) -> float:
    """Score Cumulative Layout Shift: 100 up to 0.10, 100-60 up to 0.25, then 25."""
    if value is None:
        return MISSING_METRIC_SCORE
    if value <= CLS_GOOD:
        return CURVE_TOP
    if value <= CLS_POOR:
        return _lerp(value, CLS_GOOD, CLS_POOR, CURVE_TOP, CLS_AT_POOR)
    return CLS_FLOOR


def _check_score(passed: Optional[bool], fail_score: float) -> float:
    # Only an explicit False fails; unknown counts as a pass.
    return fail_score if passed is False else CURVE_TOP


def compute_subscores(inputs: BasicInputs) -> Subscores:
    """Compute the five 0-100 category subscores."""

    cwv = _clamp(
        CWV_WEIGHTS["lcp"] * score_lower_better(inputs.lcp_ms, *LCP_THRESHOLDS_MS)
        + CWV_WEIGHTS["inp"] * score_lower_better(inputs.inp_ms, *INP_THRESHOLDS_MS)
        + CWV_WEIGHTS["cls"] * score_cls(inputs.cls)
    )

    weight = _clamp(
        WEIGHT_WEIGHTS["page_weight"]
        * score_lower_better(inputs.page_weight_kb, *PAGE_WEIGHT_THRESHOLDS_KB)
        + WEIGHT_WEIGHTS["requests"]
        * score_lower_better(inputs.requests, *REQUEST_THRESHOLDS)
    )

    ttfb = _clamp(score_lower_better(inputs.ttfb_ms, *TTFB_THRESHOLDS_MS))

    mobile = _clamp(sum(
        check_weight * _check_score(getattr(inputs.mobile_ready, name), fail_score)
        for name, (check_weight, fail_score) in MOBILE_CHECKS.items()
    ))

    seo = _clamp(sum(
        check_weight * _check_score(getattr(inputs.seo_key, name), fail_score)
        for name, (check_weight, fail_score) in SEO_CHECKS.items()
    ))

    return Subscores(cwv=cwv, weight=weight, ttfb=ttfb, mobile=mobile, seo=seo)


# ===================================================================== #
#  Gates: hard ceilings                                                   #
# ===================================================================== #

@dataclass(frozen=True)
class GateRule:
    """A severe failure that caps the score at ``cap``."""

    id: str
    cap: float
    reason: str
    applies: Callable[[BasicInputs], bool]


GATE_RULES: tuple[GateRule, ...] = (
    GateRule("no-https", 40, "No HTTPS",
             lambda i: i.seo_key.https is False),
    GateRule("not-indexable", 45, "Page not indexable",
             lambda i: i.seo_key.indexable is False),
    GateRule("slow-lcp", 65, "LCP > 4s (slow on mobile)",
             lambda i: _exceeds(i.lcp_ms, 4000)),
    GateRule("slow-inp", 65, "INP > 500ms (slow tap response)",
             lambda i: _exceeds(i.inp_ms, 500)),
    GateRule("unstable-cls", 70, "CLS > 0.25 (unstable layout)",
             lambda i: _exceeds(i.cls, 0.25)),
    GateRule("huge-page", 75, "Page > 4MB",
             lambda i: _exceeds(i.page_weight_kb, 4000)),
    GateRule("excessive-requests", 80, "Too many files (>120)",
             lambda i: _exceeds(i.requests, 120)),
    GateRule("no-viewport", 70, "No mobile viewport",
             lambda i: i.mobile_ready.viewport_meta is False),
    GateRule("cta-below-fold", 85, "CTA below the fold",
             lambda i: i.mobile_ready.cta_above_fold is False),
)


def violated_gates(inputs: BasicInputs) -> List[GateRule]:
    """Return every gate rule *inputs* violates, in table order."""
    return [rule for rule in GATE_RULES if rule.applies(inputs)]


def apply_gates(inputs: BasicInputs) -> GateResult:
    """Evaluate every gate; the strictest cap wins, all reasons are kept."""
    cap = 100.0
    reasons: List[str] = []
    for rule in violated_gates(inputs):
        cap = min(cap, float(rule.cap))
        reasons.append(rule.reason)
    return GateResult(cap=cap, reasons=reasons)


# ===================================================================== #
#  Penalties: soft, additive                                              #
# ===================================================================== #

@dataclass(frozen=True)
class PenaltyRule:
    """A secondary issue that deducts ``pts`` points."""

    id: str
    pts: int
    reason: str
    applies: Callable[[BasicInputs], bool]


PENALTY_RULES: tuple[PenaltyRule, ...] = (
    PenaltyRule("heavy-page", -5, "Heavy page (>2MB)",
                lambda i: _exceeds(i.page_weight_kb, 2000)),
    PenaltyRule("too-many-requests", -3, "Too many files (>80)",
                lambda i: _exceeds(i.requests, 80)),
    PenaltyRule("slow-ttfb", -5, "Slow server (>1800ms)",
                lambda i: _exceeds(i.ttfb_ms, 1800)),
    PenaltyRule("blocking-3p", -4, "Blocking third-party script",
                lambda i: bool(i.has_blocking_third_party)),
    PenaltyRule("weak-snippets", -3, "Weak title/description",
                lambda i: i.seo_key.title_ok is False or i.seo_key.meta_ok is False),
    PenaltyRule("h1-dup", -2, "Missing/duplicate H1",
                lambda i: i.seo_key.h1_unique is False),
    PenaltyRule("tap-targets", -3, "Small tap targets",
                lambda i: i.mobile_ready.tap_targets_ok is False),
)


def compute_penalties(inputs: BasicInputs) -> List[Penalty]:
    """Return every applicable penalty; no rule short-circuits another."""
    return [
        Penalty(id=rule.id, pts=rule.pts, reason=rule.reason)
        for rule in PENALTY_RULES
        if rule.applies(inputs)
    ]


# ===================================================================== #
#  Combination pipeline                                                   #
# ===================================================================== #

def compress_score(after_penalties: float) -> int:
    """Deflate the top of the range: 100 stays 100, 90 becomes 88."""
    return int(_clamp(_round_half_up(100 * (_clamp(after_penalties) / 100) ** FINAL_EXPONENT)))


def _label(final: int, gates: GateResult, penalties: List[Penalty], inputs: BasicInputs) -> str:
    if final >= GREEN_MIN_SCORE and not gates.reasons:
        return LABEL_GREEN
    if final >= YELLOW_MIN_SCORE:
        return LABEL_YELLOW
    # Nothing measured and nothing failed: insufficient data, not a bad site.
    if not inputs.has_measurements() and not gates.reasons and not penalties:
        return LABEL_YELLOW
    return LABEL_RED


def compute_basic_score(inputs: BasicInputs) -> ScoreDetail:
    """Compute the full score breakdown for *inputs*.

    Parameters
    ----------
    inputs : BasicInputs
        Canonical inputs, usually from ``to_basic_inputs``.

    Returns
    -------
    ScoreDetail
        Frozen result.  ``final`` is an int in [0, 100].
    """
    subscores = compute_subscores(inputs)

    raw = _clamp(sum(
        weight * getattr(subscores, key) for key, weight in RAW_WEIGHTS.items()
    ))

    gates = apply_gates(inputs)
    after_gates = min(raw, gates.cap)

    penalties = compute_penalties(inputs)
    after_penalties = _clamp(after_gates + sum(p.pts for p in penalties))

    final = compress_score(after_penalties)

    label = _label(final, gates, penalties, inputs)

    logger.info(
        "[SCORE] raw=%.1f cap=%.0f final=%d label=%s gates=[%s] penalties=%d",
        raw,
        gates.cap,
        final,
        label,
        ", ".join(gates.reasons),
        len(penalties),
    )

    return ScoreDetail(
        raw=raw,
        after_gates=after_gates,
        after_penalties=after_penalties,
        final=final,
        gates=gates,
        penalties=penalties,
        subscores=subscores,
        label=label,
    )
