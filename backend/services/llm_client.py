"""Google Gemini transport for the scoring model."""

import logging

from google import genai
from google.genai import types

from config import Settings

logger = logging.getLogger(__name__)


class LLMTransportError(RuntimeError):
    """The model could not be reached or answered without usable content."""


class GeminiClient:
    """Thin async wrapper around `genai.Client` with fixed generation settings."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.1,
        max_output_tokens: int = 2000,
        thinking_budget: int = 0,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.thinking_budget = thinking_budget
        self._client: genai.Client | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """Send a prompt and return the raw response text.

        Raises LLMTransportError on any API or network failure and on an
        empty answer.
        """
        if not self.is_configured:
            raise LLMTransportError("No GEMINI_API_KEY set")

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                    # Thinking tokens count against max_output_tokens
                    thinking_config=types.ThinkingConfig(thinking_budget=self.thinking_budget),
                ),
            )
            text = response.text
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise LLMTransportError(f"Gemini API error: {e}") from e

        if not text or not text.strip():
            raise LLMTransportError("Empty response from Gemini")
        return text


def build_llm_client(settings: Settings) -> GeminiClient:
    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.llm_temperature,
        max_output_tokens=settings.llm_max_output_tokens,
        thinking_budget=settings.llm_thinking_budget,
    )
