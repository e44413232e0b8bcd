# Schemas package
from .basic_inputs_schema import BasicInputs, MobileReady, SeoKey
from .score_schema import (
    CategoryScore,
    GateResult,
    Penalty,
    ScoreDetail,
    ScoreSummary,
    Subscores,
)
from .report_schema import ScoreReport

__all__ = [
    "BasicInputs",
    "MobileReady",
    "SeoKey",
    "GateResult",
    "Penalty",
    "Subscores",
    "ScoreDetail",
    "CategoryScore",
    "ScoreSummary",
    "ScoreReport",
]
