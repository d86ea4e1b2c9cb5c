"""Insight and recommendation text for an analysis run.

The heuristic generator is deterministic and always succeeds. An LLM-backed
generator can be injected to replace its text. It gets one attempt, and
any failure is reported as :class:`NarrativeError` so the caller can fall
back.
"""

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import structlog
from pydantic import ValidationError

from flowguard.llm.base import BaseLLMProvider, LLMProviderError
from flowguard.llm.openai_provider import OpenAIProvider
from flowguard.llm.prompts import PromptTemplates
from flowguard.models import Narrative, ProjectData, Settings, TaskStatus

logger = structlog.get_logger(__name__)

STALE_TASK_DAYS = 5

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


class NarrativeError(Exception):
    """Raised when a narrative cannot be produced."""


@dataclass(frozen=True)
class NarrativeContext:
    """What a narrative generator gets to see."""

    data: ProjectData
    saturation_hint: str = ""


class NarrativeGenerator(ABC):
    """Produces insight and recommendation text for a project."""

    @abstractmethod
    async def generate(self, context: NarrativeContext) -> Narrative:
        """Generate a narrative.

        Raises:
            NarrativeError: If no narrative could be produced
        """


def heuristic_narrative(data: ProjectData, waiting: int, scope_drift: int) -> Narrative:
    """Rule-based insights and recommendations.

    Args:
        data: Project snapshot
        waiting: Authoritative waiting signal
        scope_drift: Authoritative scope drift signal
    """
    blocked = [t for t in data.tasks if t.status == TaskStatus.BLOCKED]
    stale = [t for t in data.tasks if t.last_updated_days_ago > STALE_TASK_DAYS]
    added = data.added_features()

    insights = []
    if blocked:
        insights.append(f"{len(blocked)} task(s) blocked: {', '.join(t.title for t in blocked)}.")
    if stale:
        insights.append(f"{len(stale)} task(s) not updated in over {STALE_TASK_DAYS} days.")
    if added:
        insights.append(f"Scope grew by {len(added)} feature(s): {', '.join(added)}.")

    recommendations = []
    if waiting > 50:
        recommendations.append("Hold daily 15-min unblocking standup.")
        recommendations.append("Assign single decision-maker per pending approval.")
    if scope_drift > 40:
        recommendations.append(f"Freeze scope. Move {len(added)} feature(s) to the next release backlog.")
    if len(stale) > 2:
        recommendations.append(f"Re-assign stale tasks idle over {STALE_TASK_DAYS} days.")

    return Narrative(insights=insights, recommendations=recommendations)


def parse_narrative_response(raw: str) -> Narrative:
    """Parse a model reply that should hold a JSON object, fenced or not.

    Raises:
        NarrativeError: If the reply is not a JSON object with the expected fields
    """
    cleaned = _CODE_FENCE.sub("", raw or "").strip()
    if not cleaned:
        raise NarrativeError("Empty narrative response")

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise NarrativeError(f"Narrative response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise NarrativeError("Narrative response is not a JSON object")

    try:
        narrative = Narrative.model_validate(payload)
    except ValidationError as e:
        raise NarrativeError(f"Narrative response has unexpected shape: {e}") from e

    if not narrative.insights and not narrative.recommendations:
        raise NarrativeError("Narrative response has no insights or recommendations")
    return narrative


class LLMNarrativeGenerator(NarrativeGenerator):
    """Narrative generator backed by a chat completion provider."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        max_tokens: int = 1500,
        temperature: float = 0.3,
    ) -> None:
        """Initialize the generator.

        Args:
            provider: LLM provider for completions
            max_tokens: Maximum tokens per reply
            temperature: Sampling temperature
        """
        self.provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.prompts = PromptTemplates()

    async def generate(self, context: NarrativeContext) -> Narrative:
        prompt = self.prompts.project_risk_analysis(context.data, context.saturation_hint)
        try:
            raw = await self.provider.complete(
                prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except LLMProviderError as e:
            raise NarrativeError(str(e)) from e

        narrative = parse_narrative_response(raw)
        logger.info(
            "narrative_generated",
            model=self.provider.model,
            insights=len(narrative.insights),
            recommendations=len(narrative.recommendations),
        )
        return narrative


def build_narrator(settings: Settings) -> Optional[NarrativeGenerator]:
    """Build the LLM narrative generator, or None if it is not configured."""
    if not settings.enable_llm:
        logger.info("narrative_llm_disabled")
        return None
    if not settings.llm_api_key:
        logger.info("narrative_llm_unconfigured", reason="no LLM_API_KEY")
        return None

    config = settings.llm_config()
    provider = OpenAIProvider.from_config(config)
    return LLMNarrativeGenerator(
        provider,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
