from .normalization_engine import to_basic_inputs
from .scoring_engine import (
    apply_gates,
    compress_score,
    compute_basic_score,
    compute_penalties,
    compute_subscores,
    score_cls,
    score_lower_better,
)
from .score_summary import build_summary

__all__ = [
    "to_basic_inputs",
    "compute_basic_score",
    "compress_score",
    "compute_subscores",
    "apply_gates",
    "compute_penalties",
    "score_lower_better",
    "score_cls",
    "build_summary",
]
