"""Shape of the JSON object the scoring model is asked to return."""

import math

from pydantic import BaseModel, Field, field_validator

from models.responses import Recommendation


def _round_float(value):
    # The model sometimes answers 77.5 where an integer score is expected
    if isinstance(value, float) and math.isfinite(value):
        return round(value)
    return value


class AssessedScore(BaseModel):
    """One category as answered by the model; both keys are required."""
    score: int = Field(..., ge=0, le=100)
    explanation: str

    @field_validator("score", mode="before")
    @classmethod
    def round_score(cls, value):
        return _round_float(value)


class AssessedScores(BaseModel):
    technical_skills: AssessedScore
    experience: AssessedScore
    education: AssessedScore
    soft_skills: AssessedScore
    cultural_fit: AssessedScore


class ModelAssessment(BaseModel):
    """Validated model output.

    Every key except `candidate_name` is required, including `score` and
    `explanation` in each category; a body missing any of them is treated
    as unparsable. `filename` and `analyzed_at` are never read from the model.
    """
    candidate_name: str | None = None
    overall_score: int = Field(..., ge=0, le=100)
    detailed_scores: AssessedScores
    strengths: list[str]
    weaknesses: list[str]
    recommendation: Recommendation
    summary: str

    @field_validator("overall_score", mode="before")
    @classmethod
    def round_overall_score(cls, value):
        return _round_float(value)
