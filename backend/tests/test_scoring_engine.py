"""Basic Scoring Engine tests: curves, subscores, gates, penalties, pipeline, labels."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math

import pytest
from pydantic import ValidationError

from site_health.schemas.basic_inputs_schema import BasicInputs
from site_health.services.scoring_engine import (
    GATE_RULES,
    apply_gates,
    compress_score,
    compute_basic_score,
    compute_penalties,
    compute_subscores,
    score_cls,
    score_lower_better,
)

GOOD_SITE = {
    "LCP_ms": 2100,
    "INP_ms": 120,
    "CLS": 0.03,
    "pageWeight_kb": 1200,
    "requests": 55,
    "seoKey": {"https": True, "indexable": True, "titleOk": True, "metaOk": True, "h1Unique": True},
    "mobileReady": {"viewportMeta": True, "tapTargetsOk": True, "ctaAboveFold": True},
}

HEAVY_SITE = {
    "LCP_ms": 2800,
    "INP_ms": 260,
    "CLS": 0.12,
    "pageWeight_kb": 3200,
    "requests": 110,
    "seoKey": {"https": True, "indexable": True},
    "mobileReady": {"viewportMeta": True, "ctaAboveFold": True},
}

NO_HTTPS_SITE = {
    "LCP_ms": 3000,
    "INP_ms": 250,
    "CLS": 0.1,
    "seoKey": {"https": False, "indexable": True},
}


def _inputs(**fields):
    return BasicInputs.model_validate(fields)


# ===================================================================== #
#  Curves                                                                 #
# ===================================================================== #

class TestScoreLowerBetter:
    def test_missing_is_neutral(self):
        assert score_lower_better(None, 2500, 4000, 6000) == 50

    def test_at_or_below_good(self):
        assert score_lower_better(0, 2500, 4000, 6000) == 100
        assert score_lower_better(2500, 2500, 4000, 6000) == 100

    def test_between_good_and_ok(self):
        assert score_lower_better(3250, 2500, 4000, 6000) == pytest.approx(87.5)
        assert score_lower_better(4000, 2500, 4000, 6000) == pytest.approx(75)

    def test_between_ok_and_bad(self):
        assert score_lower_better(5000, 2500, 4000, 6000) == pytest.approx(62.5)
        assert score_lower_better(6000, 2500, 4000, 6000) == pytest.approx(50)

    def test_beyond_bad_collapses_to_floor(self):
        assert score_lower_better(6001, 2500, 4000, 6000) == 20
        assert score_lower_better(60000, 2500, 4000, 6000) == 20


class TestScoreCLS:
    def test_missing_is_neutral(self):
        assert score_cls(None) == 50

    def test_good(self):
        assert score_cls(0.0) == 100
        assert score_cls(0.10) == 100

    def test_needs_improvement_is_linear(self):
        assert score_cls(0.175) == pytest.approx(80)
        assert score_cls(0.25) == pytest.approx(60)

    def test_poor_is_flat(self):
        assert score_cls(0.26) == 25
        assert score_cls(3.0) == 25


# ===================================================================== #
#  Subscores                                                              #
# ===================================================================== #

class TestSubscores:
    def test_all_missing(self):
        s = compute_subscores(BasicInputs())
        assert s.cwv == pytest.approx(50)
        assert s.weight == pytest.approx(50)
        assert s.ttfb == pytest.approx(50)
        assert s.mobile == pytest.approx(100)
        assert s.seo == pytest.approx(100)

    def test_all_checks_failed(self):
        s = compute_subscores(_inputs(
            mobileReady={"viewportMeta": False, "tapTargetsOk": False, "ctaAboveFold": False},
            seoKey={"indexable": False, "https": False, "titleOk": False, "metaOk": False},
        ))
        assert s.mobile == pytest.approx(0.5 * 40 + 0.2 * 60 + 0.3 * 70)
        assert s.seo == pytest.approx(0.35 * 30 + 0.25 * 40 + 0.2 * 70 + 0.2 * 70)

    def test_h1_does_not_affect_seo_subscore(self):
        s = compute_subscores(_inputs(seoKey={"h1Unique": False}))
        assert s.seo == pytest.approx(100)

    def test_blends(self):
        s = compute_subscores(_inputs(**HEAVY_SITE))
        assert s.cwv == pytest.approx(0.5 * 95 + 0.3 * 95 + 0.2 * (100 - 40 * 0.02 / 0.15))
        assert s.weight == pytest.approx(0.7 * (75 - 25 * 700 / 1500) + 0.3 * 56.25)

    def test_catastrophic_values_stay_bounded(self):
        s = compute_subscores(_inputs(
            LCP_ms=1e9, INP_ms=1e9, CLS=1e3, TTFB_ms=1e9, pageWeight_kb=1e9, requests=1e9,
        ))
        for value in (s.cwv, s.weight, s.ttfb, s.mobile, s.seo):
            assert 0 <= value <= 100
        assert s.cwv == pytest.approx(0.5 * 20 + 0.3 * 20 + 0.2 * 25)
        assert s.ttfb == 20


# ===================================================================== #
#  Gates                                                                  #
# ===================================================================== #

class TestGates:
    def test_no_data_no_gates(self):
        gates = apply_gates(BasicInputs())
        assert gates.cap == 100
        assert gates.reasons == []

    def test_https_gate(self):
        gates = apply_gates(_inputs(seoKey={"https": False}))
        assert gates.cap == 40
        assert gates.reasons == ["No HTTPS"]

    def test_strictest_cap_wins_and_all_reasons_kept(self):
        gates = apply_gates(_inputs(
            LCP_ms=5000,
            mobileReady={"ctaAboveFold": False},
            seoKey={"indexable": False},
        ))
        assert gates.cap == 45
        assert gates.reasons == [
            "Page not indexable",
            "LCP > 4s (slow on mobile)",
            "CTA below the fold",
        ]

    def test_thresholds_are_strict(self):
        gates = apply_gates(_inputs(
            LCP_ms=4000, INP_ms=500, CLS=0.25, pageWeight_kb=4000, requests=120,
        ))
        assert gates.cap == 100
        assert gates.reasons == []

    def test_every_numeric_gate(self):
        gates = apply_gates(_inputs(
            LCP_ms=4001, INP_ms=501, CLS=0.26, pageWeight_kb=4001, requests=121,
        ))
        assert gates.cap == 65
        assert gates.reasons == [
            "LCP > 4s (slow on mobile)",
            "INP > 500ms (slow tap response)",
            "CLS > 0.25 (unstable layout)",
            "Page > 4MB",
            "Too many files (>120)",
        ]

    def test_viewport_gate(self):
        gates = apply_gates(_inputs(mobileReady={"viewportMeta": False}))
        assert gates.cap == 70
        assert gates.reasons == ["No mobile viewport"]

    def test_adding_a_violation_never_raises_cap(self):
        violations = [
            {"seoKey": {"https": False}},
            {"LCP_ms": 4500},
            {"CLS": 0.4},
            {"requests": 200},
            {"mobileReady": {"ctaAboveFold": False}},
        ]
        fields: dict = {}
        previous_cap = apply_gates(BasicInputs()).cap
        for violation in violations:
            fields.update(violation)
            cap = apply_gates(_inputs(**fields)).cap
            assert cap <= previous_cap
            previous_cap = cap

    def test_gate_table_caps_are_within_range(self):
        assert len(GATE_RULES) == 9
        assert all(0 <= rule.cap <= 100 for rule in GATE_RULES)


# ===================================================================== #
#  Penalties                                                              #
# ===================================================================== #

class TestPenalties:
    def test_no_data_no_penalties(self):
        assert compute_penalties(BasicInputs()) == []

    def test_all_penalties_fire_together(self):
        penalties = compute_penalties(_inputs(
            pageWeight_kb=2500,
            requests=90,
            TTFB_ms=2000,
            hasBlockingThirdParty=True,
            seoKey={"titleOk": False, "h1Unique": False},
            mobileReady={"tapTargetsOk": False},
        ))
        assert [p.id for p in penalties] == [
            "heavy-page",
            "too-many-requests",
            "slow-ttfb",
            "blocking-3p",
            "weak-snippets",
            "h1-dup",
            "tap-targets",
        ]
        assert sum(p.pts for p in penalties) == -25
        assert all(p.pts <= 0 for p in penalties)

    def test_weak_snippets_fires_once(self):
        penalties = compute_penalties(_inputs(seoKey={"titleOk": False, "metaOk": False}))
        assert [(p.id, p.pts, p.reason) for p in penalties] == [
            ("weak-snippets", -3, "Weak title/description"),
        ]

    def test_thresholds_are_strict(self):
        assert compute_penalties(_inputs(pageWeight_kb=2000, requests=80, TTFB_ms=1800)) == []


# ===================================================================== #
#  Compression                                                            #
# ===================================================================== #

class TestCompression:
    def test_endpoints(self):
        assert compress_score(100) == 100
        assert compress_score(0) == 0

    def test_top_end_is_deflated(self):
        assert compress_score(90) == 88
        assert compress_score(90) < 90

    def test_midrange(self):
        assert compress_score(50) == 42


# ===================================================================== #
#  Full pipeline                                                          #
# ===================================================================== #

class TestComputeBasicScore:
    def test_good_site_is_green(self):
        s = compute_basic_score(_inputs(**GOOD_SITE))
        assert s.raw == pytest.approx(92.5)
        assert s.final >= 88
        assert s.label == "🟢"
        assert s.gates.reasons == []
        assert s.penalties == []

    def test_heavy_but_sound_site(self):
        s = compute_basic_score(_inputs(**HEAVY_SITE))
        assert s.final < 80
        assert [p.id for p in s.penalties] == ["heavy-page", "too-many-requests"]
        assert s.after_penalties == pytest.approx(s.after_gates - 8)

    def test_https_gate_caps_score(self):
        s = compute_basic_score(_inputs(**NO_HTTPS_SITE))
        assert s.raw > 40
        assert s.after_gates <= 40
        assert s.gates.reasons == ["No HTTPS"]
        assert s.label == "🔴"

    def test_slow_site_is_red(self):
        s = compute_basic_score(_inputs(LCP_ms=7000, INP_ms=900, CLS=0.3))
        assert s.gates.cap == 65
        assert len(s.gates.reasons) == 3
        assert s.final == 39
        assert s.label == "🔴"

    def test_perfect_site(self):
        s = compute_basic_score(_inputs(TTFB_ms=300, **GOOD_SITE))
        assert s.raw == pytest.approx(100)
        assert s.final == 100
        assert s.label == "🟢"

    def test_missing_data_is_neutral(self):
        s = compute_basic_score(BasicInputs())
        assert s.raw == pytest.approx(60)
        assert s.final == 53
        assert s.gates.cap == 100
        assert s.gates.reasons == []
        assert s.penalties == []
        assert s.label != "🔴"

    def test_missing_metrics_with_explicit_failure_can_be_red(self):
        s = compute_basic_score(_inputs(seoKey={"https": False}))
        assert s.final == 32
        assert s.label == "🔴"

    def test_deterministic(self):
        first = compute_basic_score(_inputs(**HEAVY_SITE))
        second = compute_basic_score(_inputs(**HEAVY_SITE))
        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_gates_never_raise_score(self):
        for fields in (GOOD_SITE, HEAVY_SITE, NO_HTTPS_SITE, {}):
            s = compute_basic_score(_inputs(**fields))
            assert s.after_gates <= s.raw
            assert s.after_gates <= s.gates.cap

    def test_bounded_under_everything_failing(self):
        s = compute_basic_score(_inputs(
            LCP_ms=1e9,
            INP_ms=1e9,
            CLS=10,
            TTFB_ms=1e9,
            pageWeight_kb=1e9,
            requests=1e9,
            hasBlockingThirdParty=True,
            seoKey={"indexable": False, "https": False, "titleOk": False, "metaOk": False, "h1Unique": False},
            mobileReady={"viewportMeta": False, "tapTargetsOk": False, "ctaAboveFold": False},
        ))
        assert 0 <= s.final <= 100
        assert s.gates.cap == 40
        assert len(s.gates.reasons) == 9
        assert len(s.penalties) == 7
        assert s.label == "🔴"

    def test_result_is_frozen(self):
        s = compute_basic_score(BasicInputs())
        with pytest.raises(Exception):
            s.final = 99

    def test_serializes_with_canonical_names(self):
        data = compute_basic_score(_inputs(**GOOD_SITE)).model_dump(by_alias=True)
        assert {"raw", "afterGates", "afterPenalties", "final", "gates", "penalties", "subscores", "label"} <= set(data)


# ===================================================================== #
#  Input validation                                                       #
# ===================================================================== #

class TestBasicInputsValidation:
    @pytest.mark.parametrize("field", ["LCP_ms", "INP_ms", "CLS", "TTFB_ms", "pageWeight_kb", "requests"])
    @pytest.mark.parametrize("value", [math.inf, math.nan, -1])
    def test_non_finite_or_negative_rejected(self, field, value):
        with pytest.raises(ValidationError):
            BasicInputs.model_validate({field: value})

    def test_finite_values_accepted(self):
        inputs = BasicInputs(lcp_ms=0, cls=0.5, requests=3)
        assert inputs.lcp_ms == 0
        assert inputs.cls == 0.5
