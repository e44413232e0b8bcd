from pydantic import BaseModel, Field

from .basic_inputs_schema import BasicInputs
from .score_schema import ScoreDetail, ScoreSummary


class ScoreReport(BaseModel):
    """Response of the scoring endpoints.

    Bundles the normalized inputs, the engine result and its summary so a
    caller can persist ``score.final`` and ``score.gates.reasons`` and render
    the rest without recomputing anything.
    """

    inputs: BasicInputs = Field(
        ...,
        description="Canonical inputs the score was computed from",
    )
    score: ScoreDetail = Field(
        ...,
        description="Subscores, gates, penalties and final score",
    )
    summary: ScoreSummary = Field(
        ...,
        description="Verdict, category bands and recommendations",
    )
