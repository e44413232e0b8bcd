"""Rule-based score summary.

Turns a ``ScoreDetail`` into the wording the report pages show: a verdict,
per-category bands and one concrete fix per fired gate or penalty.  Reads
the engine's numbers; never recomputes them.  No LLM.
"""

from __future__ import annotations

from typing import Dict, List

from ..constants import BAND_FAIR_MIN, BAND_GOOD_MIN, LABEL_GREEN, LABEL_YELLOW, YELLOW_MIN_SCORE
from ..schemas.score_schema import CategoryScore, ScoreDetail, ScoreSummary
from .scoring_engine import GATE_RULES

# key → (title, description), in display order
CATEGORIES: Dict[str, tuple[str, str]] = {
    "cwv": ("Mobile speed", "How fast the site loads and responds on a phone"),
    "weight": ("Page size", "Whether the page is light enough to load quickly over 4G"),
    "ttfb": ("Server response", "How quickly the server starts sending the page"),
    "mobile": ("Mobile experience", "Whether the site works well on small screens"),
    "seo": ("Google visibility", "Whether Google can find and understand the site"),
}

# Gate and penalty id → what to do about it
RECOMMENDATIONS: Dict[str, str] = {
    # gates
    "no-https": "Install a TLS certificate and redirect every page to https://.",
    "not-indexable": "Remove the noindex directive or robots.txt block so guests can find the site on Google.",
    "slow-lcp": "Compress and preload the hero image and serve it from a CDN.",
    "slow-inp": "Defer non-essential JavaScript so taps respond immediately.",
    "unstable-cls": "Reserve space for images, banners and widgets so the layout does not jump.",
    "huge-page": "Cut the page below 4MB: convert photos to WebP/AVIF and drop unused scripts.",
    "excessive-requests": "Bundle or remove files until the page loads fewer than 120 resources.",
    "no-viewport": "Add a <meta name=\"viewport\"> tag so the site renders properly on phones.",
    "cta-below-fold": "Move the booking button into the first screen on mobile.",
    # penalties
    "heavy-page": "Compress photos and remove scripts that do not help sell rooms.",
    "too-many-requests": "Reduce the number of files the page loads (fonts, trackers, widgets).",
    "slow-ttfb": "Enable server caching and a CDN for the most visited pages.",
    "blocking-3p": "Load third-party scripts with async/defer so they do not block rendering.",
    "weak-snippets": "Write a clear title and meta description naming the hotel and its location.",
    "h1-dup": "Use exactly one H1 heading per page.",
    "tap-targets": "Make buttons and links larger and further apart for thumbs.",
}

_KEEP_MONITORING = "No blocking issues found. Keep monitoring after every site change."
INSUFFICIENT_DATA_VERDICT = "Not enough measurement data yet to judge this site"

_GATE_IDS_BY_REASON: Dict[str, str] = {rule.reason: rule.id for rule in GATE_RULES}


def _band(score: float) -> str:
    if score >= BAND_GOOD_MIN:
        return "good"
    if score >= BAND_FAIR_MIN:
        return "fair"
    return "poor"


def _verdict(detail: ScoreDetail) -> str:
    if detail.label == LABEL_GREEN:
        return "Excellent! Site optimized"
    if detail.label == LABEL_YELLOW:
        # yellow below the yellow cutoff is the engine's insufficient-data label
        if detail.final < YELLOW_MIN_SCORE:
            return INSUFFICIENT_DATA_VERDICT
        return "Good performance, but there is room to improve"
    return "Needs urgent improvements"


def _recommendations(detail: ScoreDetail) -> List[str]:
    ids = [_GATE_IDS_BY_REASON[r] for r in detail.gates.reasons if r in _GATE_IDS_BY_REASON]
    ids += [p.id for p in detail.penalties]

    recommendations: List[str] = []
    for rule_id in ids:
        text = RECOMMENDATIONS.get(rule_id)
        if text and text not in recommendations:
            recommendations.append(text)
    return recommendations or [_KEEP_MONITORING]


def build_summary(detail: ScoreDetail) -> ScoreSummary:
    """Produce a rule-based summary of *detail*."""
    categories = [
        CategoryScore(
            key=key,
            title=title,
            description=description,
            score=round(getattr(detail.subscores, key), 1),
            band=_band(getattr(detail.subscores, key)),
        )
        for key, (title, description) in CATEGORIES.items()
    ]

    # max/min return the first element on ties, so display order breaks them
    strongest = max(categories, key=lambda c: getattr(detail.subscores, c.key)).key
    weakest = min(categories, key=lambda c: getattr(detail.subscores, c.key)).key

    return ScoreSummary(
        verdict=_verdict(detail),
        label=detail.label,
        final=detail.final,
        categories=categories,
        strongest=strongest,
        weakest=weakest,
        limiting_factors=list(detail.gates.reasons),
        recommendations=_recommendations(detail),
    )
