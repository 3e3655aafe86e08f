"""Best-effort text extraction for candidate documents.

Strategies are tried in order until one yields enough usable text:

1. External extraction service (optional, needs an API key)
2. Structural scan of PDF text objects
3. Readable-character scan of the raw bytes
4. Synthetic template chosen from the document name (always succeeds)

`TextExtractor.extract` never raises and never returns empty text.
"""

import base64
import logging
import re
import string
from abc import ABC, abstractmethod

import httpx

from config import Settings
from models.schemas import Document, ExtractedText
from services import profile_templates

logger = logging.getLogger(__name__)

# A stage is accepted only when it yields at least this many characters
MIN_USABLE_CHARS = 100
MIN_EXTERNAL_CHARS = 50
MIN_HEURISTIC_WORDS = 10
DEFAULT_MAX_LENGTH = 5000

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse whitespace runs into single spaces."""
    return _WHITESPACE_RE.sub(" ", text).strip()


class ExtractionStrategy(ABC):
    """One stage of the extraction chain.

    Subclasses return the recovered text, or None when they found nothing
    usable. Raising is tolerated but logged by the extractor.
    """

    name: str = ""

    @abstractmethod
    async def try_extract(self, data: bytes) -> str | None:
        """Recover plain text from raw document bytes."""


class ExternalServiceStrategy(ExtractionStrategy):
    """Remote PDF-to-text conversion (PDF.co compatible API)."""

    name = "external"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        api_key: str,
        timeout: float = 30.0,
    ):
        self.http_client = http_client
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    async def try_extract(self, data: bytes) -> str | None:
        encoded = base64.b64encode(data).decode("ascii")
        payload = {
            "url": f"data:application/pdf;base64,{encoded}",
            "inline": True,
            "async": False,
        }
        try:
            response = await self.http_client.post(
                self.url,
                headers={"x-api-key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("External extraction request failed: %s", e)
            return None

        if not response.is_success:
            logger.warning("External extraction returned HTTP %d", response.status_code)
            return None

        try:
            body = response.json()
        except ValueError:
            logger.warning("External extraction returned a non-JSON body")
            return None

        if not isinstance(body, dict) or body.get("error"):
            return None
        text = body.get("body")
        if not isinstance(text, str) or len(text.strip()) <= MIN_EXTERNAL_CHARS:
            return None

        logger.debug("External extraction recovered %d characters", len(text))
        return text.strip()


# PDF text objects and the operators that show text inside them
_TEXT_OBJECT_RE = re.compile(rb"BT(.*?)ET", re.DOTALL)
_SHOW_TEXT_RE = re.compile(rb"\(([^)]*)\)\s*(?:Tj|'|\")|\[([^\]]*)\]\s*TJ")
_LITERAL_RE = re.compile(rb"\(([^)]+)\)")
_ESCAPED_BREAK_RE = re.compile(r"\\[nr]")
_LETTER_RE = re.compile(r"[a-zA-Z]")


def _keep_run(run: str) -> bool:
    return len(run) > 2 and bool(_LETTER_RE.search(run))


def _show_text_runs(block: bytes) -> list[bytes]:
    runs = []
    for literal, array in _SHOW_TEXT_RE.findall(block):
        if array:
            # TJ arrays interleave string pieces with kerning offsets
            runs.append(b"".join(_LITERAL_RE.findall(array)))
        else:
            runs.append(literal)
    return runs


def scan_pdf_structure(data: bytes) -> str:
    """Collect string literals from PDF text objects.

    Inside each BT/ET text object the operands of the show-text operators
    are taken in order; an object without recognised operators contributes
    its bare literals. A buffer with no text objects at all falls back to
    every parenthesised literal.
    """
    blocks = _TEXT_OBJECT_RE.findall(data)
    raw_runs: list[bytes] = []
    if blocks:
        for block in blocks:
            raw_runs.extend(_show_text_runs(block) or _LITERAL_RE.findall(block))
    else:
        raw_runs = _LITERAL_RE.findall(data)

    runs = []
    for raw in raw_runs:
        run = _ESCAPED_BREAK_RE.sub(" ", raw.decode("latin-1")).strip()
        if _keep_run(run):
            runs.append(run)
    return clean_text(" ".join(runs))


class PatternScanStrategy(ExtractionStrategy):
    name = "pattern"

    async def try_extract(self, data: bytes) -> str | None:
        text = scan_pdf_structure(data)
        logger.debug("Pattern scan recovered %d characters", len(text))
        return text or None


_ACCENTED = "àáâãäåæçèéêëìíîïðñòóôõöøùúûüýþÿ"
WORD_CHARS = frozenset(string.ascii_letters + string.digits + _ACCENTED + "-")
READABLE_CHARS = WORD_CHARS | frozenset(" \t\n\r\x0b\x0c.,;:!?@()")


def scan_readable_runs(data: bytes) -> tuple[str, int]:
    """Keep readable bytes, separating unreadable stretches with a space.

    Returns the cleaned text and the number of words (runs of two or more
    word characters) seen along the way.
    """
    chars: list[str] = []
    word_count = 0
    word_length = 0

    for char in data.decode("latin-1"):
        if char in READABLE_CHARS:
            if char in WORD_CHARS:
                word_length += 1
            else:
                if word_length > 1:
                    word_count += 1
                word_length = 0
            chars.append(char)
        else:
            if word_length > 1:
                word_count += 1
            word_length = 0
            if chars and chars[-1] != " ":
                chars.append(" ")

    if word_length > 1:
        word_count += 1

    return clean_text("".join(chars)), word_count


class HeuristicScanStrategy(ExtractionStrategy):
    """Readable-character scan; returns nothing rather than noise."""

    name = "heuristic"

    async def try_extract(self, data: bytes) -> str | None:
        text, word_count = scan_readable_runs(data)
        logger.debug("Heuristic scan found %d words, %d characters", word_count, len(text))
        if word_count > MIN_HEURISTIC_WORDS and len(text) > MIN_USABLE_CHARS:
            return text
        return None


class TextExtractor:
    """Runs the strategy chain and falls back to a synthetic template."""

    def __init__(
        self,
        strategies: list[ExtractionStrategy],
        max_length: int = DEFAULT_MAX_LENGTH,
        min_chars: int = MIN_USABLE_CHARS,
    ):
        self.strategies = list(strategies)
        self.max_length = max_length
        self.min_chars = min_chars

    async def extract(self, document: Document) -> ExtractedText:
        if document.raw_bytes:
            for strategy in self.strategies:
                try:
                    text = await strategy.try_extract(document.raw_bytes)
                except Exception as e:
                    logger.warning(
                        "%s extraction raised for %s: %s", strategy.name, document.name, e
                    )
                    continue

                text = (text or "").strip()
                if len(text) >= self.min_chars:
                    logger.info(
                        "Extracted %d characters from %s (%s)",
                        len(text), document.name, strategy.name,
                    )
                    return ExtractedText(
                        source_document=document.name,
                        text=text[: self.max_length],
                        method=strategy.name,
                    )
                logger.debug(
                    "%s extraction insufficient for %s (%d chars)",
                    strategy.name, document.name, len(text),
                )

        index = profile_templates.template_index(document.name)
        logger.info(
            "No usable text in %s, substituting synthetic profile #%d", document.name, index
        )
        return ExtractedText(
            source_document=document.name,
            text=profile_templates.template_for(document.name)[: self.max_length],
            method="synthetic",
            synthetic=True,
        )


def build_text_extractor(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> TextExtractor:
    """Assemble the chain named by `settings.extraction_chain`.

    The external stage is left out when no API key or HTTP client is available.
    """
    strategies: list[ExtractionStrategy] = []
    for name in settings.extraction_chain_list:
        if name == ExternalServiceStrategy.name:
            if http_client is None or not settings.extraction_api_key:
                logger.info("External extraction disabled (no API key configured)")
                continue
            strategies.append(ExternalServiceStrategy(
                http_client,
                url=settings.extraction_api_url,
                api_key=settings.extraction_api_key,
                timeout=settings.extraction_timeout_seconds,
            ))
        elif name == PatternScanStrategy.name:
            strategies.append(PatternScanStrategy())
        elif name == HeuristicScanStrategy.name:
            strategies.append(HeuristicScanStrategy())
        else:
            raise ValueError(f"Unknown extraction strategy: {name}")
    return TextExtractor(strategies, max_length=settings.max_text_length)
