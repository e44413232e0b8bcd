from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

Label = Literal["🟢", "🟡", "🔴"]
Band = Literal["good", "fair", "poor"]


class GateResult(BaseModel):
    """Score ceiling produced by the gate pass.

    ``cap`` starts at 100 and is only ever lowered.  ``reasons`` lists every
    violated gate in the fixed gate-table order, not only the binding one.
    """

    model_config = ConfigDict(frozen=True)

    cap: float = Field(
        default=100.0,
        ge=0.0,
        le=100.0,
        description="Highest score the raw score may keep",
    )
    reasons: List[str] = Field(
        default_factory=list,
        description="Human-readable reason for each violated gate",
    )


class Penalty(BaseModel):
    """A soft, additive point deduction."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable penalty identifier")
    pts: int = Field(..., le=0, description="Points deducted (zero or negative)")
    reason: str = Field(..., description="Human-readable reason")


class Subscores(BaseModel):
    """The five category scores blended into the raw score."""

    model_config = ConfigDict(frozen=True)

    cwv: float = Field(..., ge=0.0, le=100.0, description="0.5*LCP + 0.3*INP + 0.2*CLS")
    weight: float = Field(..., ge=0.0, le=100.0, description="0.7*page weight + 0.3*requests")
    ttfb: float = Field(..., ge=0.0, le=100.0, description="Time to First Byte curve")
    mobile: float = Field(..., ge=0.0, le=100.0, description="0.5*viewport + 0.2*tap targets + 0.3*CTA")
    seo: float = Field(..., ge=0.0, le=100.0, description="0.35*indexable + 0.25*https + 0.2*title + 0.2*meta")


class ScoreDetail(BaseModel):
    """Full, explainable result of the Basic Scoring Engine.

    Built fresh on every call and frozen once returned.  ``final`` is the
    only number a consumer should show as *the* score.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    raw: float = Field(..., ge=0.0, le=100.0, description="Weighted blend of subscores")
    after_gates: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        alias="afterGates",
        description="min(raw, gates.cap)",
    )
    after_penalties: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        alias="afterPenalties",
        description="after_gates plus all penalty points, clamped",
    )
    final: int = Field(
        ...,
        ge=0,
        le=100,
        description="round(100 * (after_penalties / 100) ** 1.25)",
    )
    gates: GateResult
    penalties: List[Penalty] = Field(default_factory=list)
    subscores: Subscores
    label: Label = Field(..., description="🟢 excellent, 🟡 fair, 🔴 needs work")


class CategoryScore(BaseModel):
    """One subscore presented for humans."""

    key: str
    title: str
    description: str
    score: float = Field(..., ge=0.0, le=100.0)
    band: Band


class ScoreSummary(BaseModel):
    """Rule-based, human-readable reading of a ``ScoreDetail``."""

    verdict: str = Field(..., description="One-line verdict matching the label")
    label: Label
    final: int = Field(..., ge=0, le=100)
    categories: List[CategoryScore] = Field(default_factory=list)
    strongest: str = Field(..., description="Key of the highest subscore")
    weakest: str = Field(..., description="Key of the lowest subscore")
    limiting_factors: List[str] = Field(
        default_factory=list,
        description="Gate reasons capping the score",
    )
    recommendations: List[str] = Field(
        default_factory=list,
        description="Actionable fixes, gates first then penalties",
    )
