"""Candidate scoring through the language model.

`LLMScorer.score` always returns a well-formed CandidateAnalysis:

- transport failure   -> failed analysis, every category scored 0
- unparsable response -> degraded analysis, every category scored 50
- valid response      -> model values, stamped with filename and time
"""

import json
import logging
from datetime import datetime, timezone
from typing import Callable, Protocol

from pydantic import ValidationError

from models.responses import CandidateAnalysis, DetailedScores, Recommendation
from models.schemas import ModelAssessment
from services.prompt_builder import build_scoring_prompt

logger = logging.getLogger(__name__)

FAILED_SCORE = 0
NEUTRAL_SCORE = 50


class LLMClient(Protocol):
    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: str) -> str: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def failed_analysis(
    filename: str,
    reason: str,
    analyzed_at: datetime | None = None,
    weakness: str = "Technical error during analysis",
    explanation: str = "Error during analysis",
) -> CandidateAnalysis:
    """Analysis for a document that could not be scored at all."""
    return CandidateAnalysis(
        filename=filename,
        candidate_name="Analysis error",
        overall_score=FAILED_SCORE,
        detailed_scores=DetailedScores.uniform(FAILED_SCORE, explanation),
        strengths=[],
        weaknesses=[weakness],
        recommendation=Recommendation.NOT_RECOMMENDED,
        summary=f"Analysis failed: {reason}",
        analyzed_at=analyzed_at or _utcnow(),
        failed=True,
    )


def degraded_analysis(filename: str, analyzed_at: datetime | None = None) -> CandidateAnalysis:
    """Neutral analysis for a model answer that could not be parsed."""
    return CandidateAnalysis(
        filename=filename,
        candidate_name="Name not detected",
        overall_score=NEUTRAL_SCORE,
        detailed_scores=DetailedScores.uniform(
            NEUTRAL_SCORE, "Analysis failed - model response could not be parsed"
        ),
        strengths=["Incomplete analysis"],
        weaknesses=["The profile could not be analysed correctly"],
        recommendation=Recommendation.NOT_RECOMMENDED,
        summary="The automatic analysis returned an unreadable response.",
        analyzed_at=analyzed_at or _utcnow(),
        failed=False,
        degraded=True,
    )


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_assessment(body: str) -> ModelAssessment:
    """Parse the model's raw answer.

    Raises json.JSONDecodeError or pydantic.ValidationError when the body
    is not a JSON object with every required key.
    """
    data = json.loads(_strip_code_fences(body))
    return ModelAssessment.model_validate(data)


class LLMScorer:
    """Scores one extracted profile against a job description."""

    def __init__(self, client: LLMClient, clock: Callable[[], datetime] = _utcnow):
        self.client = client
        self.clock = clock

    @property
    def is_configured(self) -> bool:
        return self.client.is_configured

    async def score(self, text: str, job_description: str, document_name: str) -> CandidateAnalysis:
        prompt = build_scoring_prompt(text, job_description)

        try:
            body = await self.client.generate(prompt)
        except Exception as e:
            logger.error("Scoring request failed for %s: %s", document_name, e)
            return failed_analysis(document_name, str(e), analyzed_at=self.clock())

        try:
            assessment = parse_assessment(body)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error("Unparsable model response for %s: %s", document_name, e)
            logger.debug("Raw model response: %s", body)
            return degraded_analysis(document_name, analyzed_at=self.clock())

        return CandidateAnalysis(
            filename=document_name,
            candidate_name=assessment.candidate_name or "Unknown candidate",
            overall_score=assessment.overall_score,
            detailed_scores=DetailedScores.model_validate(assessment.detailed_scores.model_dump()),
            strengths=assessment.strengths,
            weaknesses=assessment.weaknesses,
            recommendation=assessment.recommendation,
            summary=assessment.summary,
            analyzed_at=self.clock(),
        )
