"""Insight text providers.

Modules:
    base     — InsightProvider ABC
    static   — Random phrase from the configured table
    remote   — Anthropic Messages API
    fallback — Error-swallowing decorator and provider wiring
"""

from luna.insights.base import InsightProvider, InsightUnavailableError
from luna.insights.fallback import FallbackInsightProvider, build_insight_provider
from luna.insights.remote import AnthropicInsightProvider
from luna.insights.static import StaticInsightProvider

__all__ = [
    "InsightProvider",
    "InsightUnavailableError",
    "FallbackInsightProvider",
    "build_insight_provider",
    "AnthropicInsightProvider",
    "StaticInsightProvider",
]
