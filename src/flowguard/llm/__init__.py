"""LLM integration for narrative insights."""

from flowguard.llm.base import BaseLLMProvider, LLMProviderError
from flowguard.llm.narrative import (
    LLMNarrativeGenerator,
    NarrativeContext,
    NarrativeError,
    NarrativeGenerator,
    build_narrator,
    heuristic_narrative,
    parse_narrative_response,
)
from flowguard.llm.openai_provider import OpenAIProvider

__all__ = [
    "BaseLLMProvider",
    "LLMProviderError",
    "OpenAIProvider",
    "NarrativeContext",
    "NarrativeError",
    "NarrativeGenerator",
    "LLMNarrativeGenerator",
    "heuristic_narrative",
    "parse_narrative_response",
    "build_narrator",
]
