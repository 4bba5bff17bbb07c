"""Strategy generation: send the master prompt to the LLM and return its raw JSON text."""

from __future__ import annotations

import logging
from typing import Optional

from config import Settings, get_settings
from intelligence.llm import BaseLLM, GeminiLLM
from utils.exceptions import GenerationError


logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


class StrategyGenerator:
    """Thin client around one LLM call. Output is passed through unparsed."""

    def __init__(self, llm: BaseLLM) -> None:
        self.llm = llm

    async def generate(self, prompt: str) -> str:
        """Return the provider's text payload; raise GenerationError on any failure."""
        try:
            text = await self.llm.achat(prompt, response_mime_type=JSON_MIME_TYPE)
        except Exception as exc:
            logger.error(f"{self.llm.provider} generation failed: {exc}")
            raise GenerationError(
                f"Failed to get a valid response from the {self.llm.provider} API.",
                provider=self.llm.provider,
                cause=str(exc),
            ) from exc

        if not isinstance(text, str) or not text.strip():
            raise GenerationError(
                f"Empty response from the {self.llm.provider} API.",
                provider=self.llm.provider,
            )
        return text

    async def aclose(self) -> None:
        await self.llm.aclose()


def build_strategy_generator(settings: Optional[Settings] = None) -> StrategyGenerator:
    settings = settings or get_settings()
    gemini = settings.gemini
    llm = GeminiLLM(
        model=gemini.model_name,
        api_key=gemini.api_key,
        temperature=gemini.temperature,
        max_tokens=gemini.max_tokens,
        timeout=gemini.timeout,
    )
    return StrategyGenerator(llm)
