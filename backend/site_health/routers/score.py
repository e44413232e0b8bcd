"""
Scoring Router

Thin HTTP boundary over the two pure engine functions.  All business logic
lives in the services package; the route only wires them together.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, status

from ..schemas.basic_inputs_schema import BasicInputs
from ..schemas.report_schema import ScoreReport
from ..services.normalization_engine import to_basic_inputs
from ..services.score_summary import build_summary
from ..services.scoring_engine import compute_basic_score
from ..timing import sync_timer

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/score",
    tags=["Scoring"],
    responses={
        500: {"description": "Internal server error during scoring"}
    }
)


def _build_report(inputs: BasicInputs) -> ScoreReport:
    detail = compute_basic_score(inputs)
    return ScoreReport(inputs=inputs, score=detail, summary=build_summary(detail))


@router.post(
    "",
    response_model=ScoreReport,
    status_code=status.HTTP_200_OK,
    summary="Score a Raw Measurement Record",
    response_description="Normalized inputs, score breakdown and recommendations",
)
def score_record(record: Dict[str, Any] = Body(...)) -> ScoreReport:
    """
    Normalize a raw measurement record (device split, CrUX style or legacy
    flat fields) and score it.
    """
    with sync_timer("score_record", "REQUEST"):
        try:
            inputs = to_basic_inputs(record)
            report = _build_report(inputs)
        except Exception as e:
            logger.exception("Scoring failed for %s", record.get("url", "<no url>"))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Scoring failed: {str(e)}"
            ) from e

    logger.info(
        "[SCORE] %s → final=%d, gates=%d",
        record.get("url", "<no url>"),
        report.score.final,
        len(report.score.gates.reasons),
    )
    return report


@router.post(
    "/inputs",
    response_model=ScoreReport,
    status_code=status.HTTP_200_OK,
    summary="Score Canonical Inputs",
    response_description="Score breakdown and recommendations",
)
def score_inputs(inputs: BasicInputs) -> ScoreReport:
    """Score inputs that are already in canonical ``BasicInputs`` form."""
    with sync_timer("score_inputs", "REQUEST"):
        try:
            return _build_report(inputs)
        except Exception as e:
            logger.exception("Scoring failed for canonical inputs")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Scoring failed: {str(e)}"
            ) from e


@router.get(
    "/health",
    summary="Health Check",
    description="Check if the scoring service is running",
    response_description="Health status"
)
def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy", "service": "site-scoring"}
