from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ScoreCategory(str, Enum):
    TECHNICAL_SKILLS = "technical_skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SOFT_SKILLS = "soft_skills"
    CULTURAL_FIT = "cultural_fit"


class Recommendation(str, Enum):
    HIGHLY_RECOMMENDED = "HIGHLY_RECOMMENDED"
    RECOMMENDED = "RECOMMENDED"
    CONDITIONAL = "CONDITIONAL"
    NOT_RECOMMENDED = "NOT_RECOMMENDED"


class DetailedScore(BaseModel):
    score: int = Field(0, ge=0, le=100)
    explanation: str = ""


class DetailedScores(BaseModel):
    """One entry per ScoreCategory; all five are required."""
    technical_skills: DetailedScore
    experience: DetailedScore
    education: DetailedScore
    soft_skills: DetailedScore
    cultural_fit: DetailedScore

    @classmethod
    def uniform(cls, score: int, explanation: str) -> "DetailedScores":
        """Same score and explanation in every category."""
        return cls(**{
            category.value: DetailedScore(score=score, explanation=explanation)
            for category in ScoreCategory
        })

    def scores(self) -> dict[str, int]:
        return {category.value: getattr(self, category.value).score for category in ScoreCategory}


class CandidateAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    candidate_name: str = "Unknown candidate"
    overall_score: int = Field(0, ge=0, le=100)
    detailed_scores: DetailedScores
    strengths: list[str] = []
    weaknesses: list[str] = []
    recommendation: Recommendation = Recommendation.NOT_RECOMMENDED
    summary: str = ""
    analyzed_at: datetime
    failed: bool = False
    # Model answered but its body could not be parsed; scores are neutral
    degraded: bool = False


class BatchResult(BaseModel):
    total_analyzed: int = 0
    top_candidates: list[CandidateAnalysis] = []
    all_candidates: list[CandidateAnalysis] = []


class AnalyzeProfilesResponse(BaseModel):
    message: str = "Analysis completed"
    job_description: str
    candidates: BatchResult
    analyzed_at: datetime


class UploadedProfile(BaseModel):
    filename: str
    original_name: str
    size: int


class UploadResponse(BaseModel):
    message: str
    files: list[UploadedProfile] = []
    total_uploaded: int = 0
    total_attempted: int = 0


class StoredProfile(BaseModel):
    filename: str
    size: int = 0


class ProfileListResponse(BaseModel):
    profiles: list[StoredProfile] = []
