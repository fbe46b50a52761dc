"""Fallback decorator and provider wiring."""

from __future__ import annotations

import logging
from typing import Sequence

from luna.config import Settings
from luna.cycle.config_loader import CycleConfig
from luna.cycle.records import CyclePhase
from luna.insights.base import InsightProvider
from luna.insights.remote import AnthropicInsightProvider
from luna.insights.static import StaticInsightProvider

logger = logging.getLogger("luna.insights")


class FallbackInsightProvider(InsightProvider):
    """Ask ``primary`` first; on any failure answer from ``fallback``."""

    SOURCE_ID = "fallback"

    def __init__(self, primary: InsightProvider, fallback: InsightProvider) -> None:
        self.primary = primary
        self.fallback = fallback

    async def generate(
        self,
        phase: CyclePhase | None,
        cycle_day: int | None,
        symptoms: Sequence[str] = (),
        moods: Sequence[str] = (),
    ) -> str:
        try:
            return await self.primary.generate(phase, cycle_day, symptoms, moods)
        except Exception as exc:
            logger.warning(
                "%s insight failed (%s); using %s",
                self.primary.SOURCE_ID,
                exc,
                self.fallback.SOURCE_ID,
            )
            return await self.fallback.generate(phase, cycle_day, symptoms, moods)


def build_insight_provider(settings: Settings, config: CycleConfig) -> InsightProvider:
    """Static phrases by default; remote generation with static fallback when enabled."""
    static = StaticInsightProvider(config.insights.static, config.insights.awaiting)
    if not settings.enable_ai:
        return static
    if not settings.anthropic_api_key:
        logger.warning("AI insights enabled but no API key is set; using static phrases")
        return static

    remote = AnthropicInsightProvider(
        api_key=settings.anthropic_api_key,
        model=settings.insight_model,
        max_tokens=settings.insight_max_tokens,
        timeout=settings.insight_timeout_seconds,
        empty_response=config.insights.empty_response,
    )
    logger.info("AI insights enabled (model=%s)", settings.insight_model)
    return FallbackInsightProvider(remote, static)
