"""Shared test configuration, pytest markers and fakes."""

import json

import pytest

from models.schemas import Document, ExtractedText


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: talks to real external services (needs API keys)"
    )


def assessment_json(score: int, name: str = "Jane Doe", **overrides) -> str:
    """A well-formed model answer with every category at `score`."""
    body = {
        "candidate_name": name,
        "overall_score": score,
        "detailed_scores": {
            category: {"score": score, "explanation": f"{category} looks fine"}
            for category in ("technical_skills", "experience", "education", "soft_skills", "cultural_fit")
        },
        "strengths": ["Python", "FastAPI"],
        "weaknesses": ["No Kubernetes"],
        "recommendation": "RECOMMENDED",
        "summary": "Solid backend profile.",
    }
    body.update(overrides)
    return json.dumps(body)


def make_pdf(*lines: str) -> bytes:
    """Minimal PDF-like buffer with one text object per line."""
    objects = b"\n".join(
        b"BT /F1 12 Tf 72 %d Td (%s) Tj ET" % (720 - 14 * i, line.encode("latin-1"))
        for i, line in enumerate(lines)
    )
    return b"%PDF-1.4\n1 0 obj << /Length 0 >>\nstream\n" + objects + b"\nendstream\nendobj\n%%EOF"


class FakeLLMClient:
    """Returns queued answers in order; an Exception in the queue is raised."""

    def __init__(self, responses=(), configured: bool = True):
        self.responses = list(responses)
        self.configured = configured
        self.prompts: list[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class EchoExtractor:
    """Extractor stand-in: the document name becomes the profile text."""

    def __init__(self, fail_on: set[str] = frozenset()):
        self.fail_on = set(fail_on)
        self.calls: list[str] = []

    async def extract(self, document: Document) -> ExtractedText:
        self.calls.append(document.name)
        if document.name in self.fail_on:
            raise RuntimeError(f"cannot open {document.name}")
        return ExtractedText(
            source_document=document.name,
            text=f"Profile text of {document.name}",
            method="echo",
        )


@pytest.fixture
def fake_llm():
    return FakeLLMClient


@pytest.fixture
def echo_extractor():
    return EchoExtractor()


@pytest.fixture
def sleep_calls():
    """Recording replacement for asyncio.sleep."""
    calls: list[float] = []

    async def _sleep(seconds: float) -> None:
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep
