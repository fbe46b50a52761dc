"""Insight provider interface.

An insight is a short, warm sentence for the home screen, chosen from the
current phase, cycle day, and the day's logged symptoms and moods.  Phase
inference never depends on a provider; providers only consume its output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from luna.cycle.records import CyclePhase


class InsightUnavailableError(RuntimeError):
    """Raised by a provider that cannot answer (disabled, no credential, empty reply)."""


class InsightProvider(ABC):
    """Produces insight text for a phase.

    Subclasses must implement ``generate``.  ``SOURCE_ID`` names the
    provider in logs.
    """

    SOURCE_ID: str = "base"

    @abstractmethod
    async def generate(
        self,
        phase: CyclePhase | None,
        cycle_day: int | None,
        symptoms: Sequence[str] = (),
        moods: Sequence[str] = (),
    ) -> str:
        """Return insight text.

        Args:
            phase:     Current phase, or None while awaiting input.
            cycle_day: 1-indexed cycle day, if known.
            symptoms:  Symptoms logged for the reference date.
            moods:     Moods logged for the reference date.
        """
