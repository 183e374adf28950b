"""Semantic entity extraction via a chat-completion model.

Sends article text to the model, then hands whatever comes back to the
best-effort parser and the validator. Any failure along the way (network,
non-2xx, timeout, unparsable output) degrades to an empty ExtractionResult.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from .json_recovery import best_effort_parse
from .schemas import ExtractionResult
from .validators import EntityValidator

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You extract structured content from an article. Return ONLY a JSON object with keys "
    '"stats", "quotes", "lists", "timeline" (object or null) and "processes". '
    "Stats: value, prefix, suffix, label, context, category, sentiment, sourceQuote, groupId "
    "(opening, middle, adjudicator, closing, success or ungrouped). "
    "Quotes: text, attribution, type, emphasis. Lists: title, items [{title, description}], "
    "type (checklist, bullet, numbered, process), actionable. Timeline: title, events "
    "[{date, description, type}]. Processes: title, steps [{number, title, description}]. "
    "Use the actual wording of the article, never placeholders such as 'Step 1'."
)


class ExtractionFailure(RuntimeError):
    """The model call produced nothing usable."""


class SemanticEntityExtractor:
    """Extract stats, quotes, lists, a timeline and processes from article text."""

    def __init__(
        self,
        llm_client: Any = None,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        max_tokens: int = 8000,
        temperature: float = 0.1,
    ) -> None:
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        if llm_client is not None:
            self.client = llm_client
        elif os.getenv("OPENAI_API_KEY"):
            self.client = AsyncOpenAI(api_key=os.getenv("OPENAI_API_KEY"))
        else:
            logger.warning("No LLM client available; entity extraction will return empty results")
            self.client = None

    async def _complete(self, content: str) -> str:
        """Single awaited model call; raises ExtractionFailure on any problem."""
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": f"Extract all structured content from this article:\n\n{content}"},
                    ],
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ExtractionFailure(f"extractor timed out after {self.timeout}s") from exc
        except OpenAIError as exc:
            raise ExtractionFailure(f"extractor API error: {exc}") from exc

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise ExtractionFailure(f"unexpected response shape: {exc}") from exc
        if not text or not text.strip():
            raise ExtractionFailure("extractor returned an empty message")
        return text

    async def extract(self, content: str) -> ExtractionResult:
        """
        Extract validated entities from article text.

        Args:
            content: Plain article text

        Returns:
            ExtractionResult, empty on any failure
        """
        if self.client is None or not content or not content.strip():
            return ExtractionResult.empty()

        logger.info(f"Extracting entities from {len(content)} chars with {self.model}")
        try:
            raw_text = await self._complete(content)
        except ExtractionFailure as exc:
            logger.warning(f"Entity extraction failed: {exc}; continuing with text-only layout")
            return ExtractionResult.empty()
        except Exception as exc:
            logger.warning(f"Entity extraction failed unexpectedly: {exc}; continuing with text-only layout")
            return ExtractionResult.empty()

        return self.parse_response(raw_text)

    @staticmethod
    def parse_response(raw_text: Optional[str]) -> ExtractionResult:
        outcome = best_effort_parse(raw_text)
        if not outcome.ok:
            logger.warning(f"Extractor returned invalid JSON ({outcome.error}); using empty result")
            return ExtractionResult.empty()
        result = EntityValidator.validate(outcome.data)
        logger.info(f"Extracted: {result.summary()} (parse strategy: {outcome.strategy})")
        return result
