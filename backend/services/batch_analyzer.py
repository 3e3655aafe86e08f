"""Batch analysis: extract, score and rank every candidate for one job.

Documents are processed one at a time with a pause between model calls to
stay under the model API rate limit. Output order comes from the final
sort, never from call order.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Iterable

from models.responses import BatchResult, CandidateAnalysis
from models.schemas import Document
from services import profile_templates
from services.llm_scorer import LLMScorer, failed_analysis
from services.object_store import ObjectStore
from services.text_extractor import TextExtractor

logger = logging.getLogger(__name__)

TOP_CANDIDATES = 3
DEFAULT_INTER_CALL_DELAY = 1.0


class BatchInputError(ValueError):
    """The batch was rejected before any document was processed."""


class EmptyStorePolicy(str, Enum):
    """What to do when the store holds no documents."""
    ERROR = "error"
    SAMPLE = "sample"


def rank_analyses(analyses: list[CandidateAnalysis]) -> BatchResult:
    """Sort descending by overall score; ties keep their input order."""
    ranked = sorted(analyses, key=lambda a: a.overall_score, reverse=True)
    return BatchResult(
        total_analyzed=len(ranked),
        top_candidates=ranked[:TOP_CANDIDATES],
        all_candidates=ranked,
    )


def sample_batch() -> list[Document]:
    """Built-in documents analysed when the store is empty and policy allows it."""
    return [
        Document(name=name, raw_bytes=text.encode("utf-8"))
        for name, text in profile_templates.sample_documents()
    ]


class BatchAnalyzer:
    def __init__(
        self,
        extractor: TextExtractor,
        scorer: LLMScorer,
        store: ObjectStore | None = None,
        inter_call_delay: float = DEFAULT_INTER_CALL_DELAY,
        empty_store_policy: EmptyStorePolicy = EmptyStorePolicy.ERROR,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.extractor = extractor
        self.scorer = scorer
        self.store = store
        self.inter_call_delay = inter_call_delay
        self.empty_store_policy = EmptyStorePolicy(empty_store_policy)
        self.sleep = sleep

    def _check_preconditions(self, job_description: str) -> None:
        if not job_description or not job_description.strip():
            raise BatchInputError("Job description is required")
        if not self.scorer.is_configured:
            raise BatchInputError("Model credentials are not configured (GEMINI_API_KEY)")

    async def analyze_batch(
        self, documents: Iterable[Document], job_description: str
    ) -> BatchResult:
        """Score every document against the job and rank the results.

        Raises BatchInputError for an empty job description, an empty
        document set or missing model credentials. Per-document failures
        become failed analyses inside the result.
        """
        self._check_preconditions(job_description)
        documents = list(documents)
        if not documents:
            raise BatchInputError("No candidate documents to analyse")

        logger.info("Analysing %d profile(s)", len(documents))
        analyses = []
        for index, document in enumerate(documents):
            analyses.append(await self._analyze_document(document, job_description))
            if index < len(documents) - 1 and self.inter_call_delay > 0:
                await self.sleep(self.inter_call_delay)

        result = rank_analyses(analyses)
        best = result.top_candidates[0]
        logger.info(
            "Analysis complete: %d analysed, top candidate %s (%d)",
            result.total_analyzed, best.candidate_name, best.overall_score,
        )
        return result

    async def _analyze_document(self, document: Document, job_description: str) -> CandidateAnalysis:
        try:
            extracted = await self.extractor.extract(document)
            analysis = await self.scorer.score(extracted.text, job_description, document.name)
        except Exception as e:
            logger.exception("Failed to analyse %s", document.name)
            return failed_analysis(
                document.name,
                f"could not read the file: {e}",
                weakness="Corrupted or unreadable PDF file",
                explanation="Unreadable file",
            )

        logger.info("Completed analysis for %s - score: %d", document.name, analysis.overall_score)
        return analysis

    async def analyze_store(self, job_description: str) -> BatchResult:
        """Analyse everything currently in the object store."""
        if self.store is None:
            raise ValueError("BatchAnalyzer has no object store")
        self._check_preconditions(job_description)

        documents = await self.store.list_documents()
        if not documents:
            if self.empty_store_policy is EmptyStorePolicy.SAMPLE:
                logger.warning("No profiles in %s store, analysing the built-in sample batch", self.store.name)
                documents = sample_batch()
            else:
                raise BatchInputError("No candidate PDF files found. Please upload PDF files to analyse.")

        return await self.analyze_batch(documents, job_description)
