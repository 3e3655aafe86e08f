"""Inter-component contracts for the extraction and scoring pipeline."""

from models.schemas.document import Document
from models.schemas.extracted_text import ExtractedText
from models.schemas.model_assessment import AssessedScore, AssessedScores, ModelAssessment

__all__ = [
    "Document",
    "ExtractedText",
    "AssessedScore",
    "AssessedScores",
    "ModelAssessment",
]
