"""Local phrase-table insights.  Free, offline, and always available."""

from __future__ import annotations

import random
from typing import Mapping, Sequence

from luna.cycle.records import CyclePhase
from luna.insights.base import InsightProvider


class StaticInsightProvider(InsightProvider):
    """Pick a random canned phrase for the phase."""

    SOURCE_ID = "static"

    def __init__(
        self,
        phrases: Mapping[CyclePhase, Sequence[str]],
        awaiting: str,
        rng: random.Random | None = None,
    ) -> None:
        self._phrases = {phase: list(items) for phase, items in phrases.items()}
        self._awaiting = awaiting
        self._rng = rng or random.Random()

    def pick(self, phase: CyclePhase | None) -> str:
        if phase is None:
            return self._awaiting
        choices = self._phrases.get(phase)
        if not choices:
            return self._awaiting
        return self._rng.choice(choices)

    async def generate(
        self,
        phase: CyclePhase | None,
        cycle_day: int | None,
        symptoms: Sequence[str] = (),
        moods: Sequence[str] = (),
    ) -> str:
        return self.pick(phase)
