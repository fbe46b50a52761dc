"""LLM-generated insights via the Anthropic Messages API.

Off by default.  Enabled with ``LUNA_ENABLE_AI=true`` and an API key in
``LUNA_ANTHROPIC_API_KEY``.  Always wrapped in ``FallbackInsightProvider``
so a failed call degrades to the static phrase table instead of surfacing
an error.
"""

from __future__ import annotations

import logging
from typing import Sequence

import anthropic

from luna.cycle.records import CyclePhase
from luna.insights.base import InsightProvider, InsightUnavailableError

logger = logging.getLogger("luna.insights.remote")

_PROMPT = """You are a caring, knowledgeable and gentle women's health companion.

Context:
- Current phase: {phase}
- Cycle day: {cycle_day} (day 1 is the first day of the period)
{symptom_line}{mood_line}
Task:
Write a short, warm and comforting "daily whisper" of no more than 2 sentences.
If she is in the menstrual phase, focus on rest and keeping warm.
If she is in the follicular or ovulation phase, celebrate her energy.
If she is in the luteal phase, soothe her feelings and suggest something comforting.
Do not sound clinical like a doctor; sound like a thoughtful partner or best friend.
Reply with the message only."""


def build_prompt(
    phase: CyclePhase,
    cycle_day: int | None,
    symptoms: Sequence[str] = (),
    moods: Sequence[str] = (),
) -> str:
    symptom_line = f"- She feels: {', '.join(symptoms)}\n" if symptoms else ""
    mood_line = f"- Her mood today: {', '.join(moods)}\n" if moods else ""
    return _PROMPT.format(
        phase=phase.value,
        cycle_day=cycle_day or 1,
        symptom_line=symptom_line,
        mood_line=mood_line,
    )


class AnthropicInsightProvider(InsightProvider):
    """Generate insight text with a Claude model."""

    SOURCE_ID = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 200,
        timeout: float = 10.0,
        empty_response: str = "",
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key:        Anthropic API key (LUNA_ANTHROPIC_API_KEY).
            model:          Model name.
            max_tokens:     Reply token cap.
            timeout:        Request timeout in seconds.
            empty_response: Text returned when the model replies with nothing.
            client:         Optional pre-configured client (for testing).
        """
        self._api_key = api_key
        self._model = model
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._empty_response = empty_response
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self._api_key:
                raise InsightUnavailableError("No Anthropic API key configured")
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key, timeout=self._timeout, max_retries=0
            )
        return self._client

    async def generate(
        self,
        phase: CyclePhase | None,
        cycle_day: int | None,
        symptoms: Sequence[str] = (),
        moods: Sequence[str] = (),
    ) -> str:
        if phase is None:
            raise InsightUnavailableError("No phase to describe yet")

        client = self._get_client()
        response = await client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            messages=[
                {
                    "role": "user",
                    "content": build_prompt(phase, cycle_day, symptoms, moods),
                }
            ],
        )
        text = "".join(
            getattr(block, "text", "") for block in response.content
        ).strip()
        if not text:
            if self._empty_response:
                return self._empty_response
            raise InsightUnavailableError("Model returned an empty reply")

        logger.info("Generated %s insight for cycle day %s", phase.value, cycle_day)
        return text
