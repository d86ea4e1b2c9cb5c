"""Analysis entry point: runs the full pipeline for one project snapshot."""

import asyncio
from datetime import date
from typing import Any, List, Mapping, Optional, Tuple

import structlog

from flowguard.gate import (
    evaluate_saturation,
    gate_tasks_by_signal,
    generate_saturation_insights,
    generate_saturation_recommendations,
)
from flowguard.llm.narrative import (
    NarrativeContext,
    NarrativeError,
    NarrativeGenerator,
    heuristic_narrative,
)
from flowguard.models import (
    DeadlineAssessment,
    FinalResult,
    GatedTaskList,
    Narrative,
    PrioritizedTask,
    ProjectData,
)
from flowguard.prioritizer import prioritize_tasks
from flowguard.signals.activity import compute_delay_risk
from flowguard.signals.deadline import compute_deadline_assessment

logger = structlog.get_logger(__name__)

MAX_NARRATIVE_ITEMS = 6


def build_project_data(
    payload: Optional[Mapping[str, Any]],
    default: Optional[ProjectData] = None,
) -> ProjectData:
    """Build a ProjectData from a request payload.

    Missing optional fields become empty collections. A missing payload
    uses the default supplied by the caller.

    Args:
        payload: Decoded request body (the ``project`` object)
        default: Project to analyse when no payload is given

    Returns:
        Validated ProjectData

    Raises:
        ValueError: If there is no payload and no default
        pydantic.ValidationError: If the payload is malformed
    """
    if payload is None:
        if default is None:
            raise ValueError("No project data supplied and no default configured")
        return default.model_copy(deep=True)
    return ProjectData.model_validate(dict(payload))


def _merge(editorial: List[str], narrative: List[str]) -> List[str]:
    return (editorial + narrative)[:MAX_NARRATIVE_ITEMS]


async def _resolve_narrative(
    data: ProjectData,
    assessment: DeadlineAssessment,
    saturation_hint: str,
    narrator: Optional[NarrativeGenerator],
) -> Tuple[Narrative, bool]:
    signals = assessment.signals
    if narrator is not None:
        try:
            narrative = await narrator.generate(NarrativeContext(data, saturation_hint))
            return narrative, True
        except NarrativeError as e:
            logger.warning("narrative_generation_failed", error=str(e))
        except Exception as e:
            logger.warning("narrative_generation_failed", error=str(e), error_type=type(e).__name__)

    return heuristic_narrative(data, signals.waiting, signals.scope_drift), False


def assemble_result(
    assessment: DeadlineAssessment,
    gated: GatedTaskList,
    narrative: Narrative,
    ai_powered: bool,
) -> FinalResult:
    """Merge deterministic scores, gated tasks and narrative text.

    Numeric fields always come from the assessment, whichever narrative was
    used. Gate insights and recommendations come first, and each list is
    capped at six entries.
    """
    signals = assessment.signals
    saturation = gated.saturation
    return FinalResult(
        **assessment.model_dump(),
        delay_risk_score=compute_delay_risk(signals.waiting, signals.scope_drift),
        waiting_score=signals.waiting,
        scope_drift_score=signals.scope_drift,
        deadline_extension_probability=assessment.probability,
        prioritized_tasks=gated.active,
        held_tasks=gated.held,
        saturation=saturation,
        insights=_merge(generate_saturation_insights(saturation), narrative.insights),
        recommendations=_merge(
            generate_saturation_recommendations(saturation), narrative.recommendations
        ),
        ai_powered=ai_powered,
    )


async def analyze_project(
    data: ProjectData,
    narrator: Optional[NarrativeGenerator] = None,
    today: Optional[date] = None,
) -> FinalResult:
    """Analyse a project snapshot.

    Args:
        data: Project snapshot
        narrator: Optional external narrative generator. Tried once; on
            failure the heuristic narrative is used.
        today: Reference date (defaults to today)

    Returns:
        FinalResult for the snapshot
    """
    try:
        assessment = compute_deadline_assessment(data, today=today)
    except Exception as e:
        logger.warning("deadline_assessment_failed", error=str(e))
        assessment = DeadlineAssessment.neutral()

    # Every later step reads waiting and scope drift from here
    signals = assessment.signals

    saturation = evaluate_saturation(
        signals, data.tasks, data.initial_features, data.current_features
    )

    prioritized: List[PrioritizedTask] = []
    try:
        prioritized = prioritize_tasks(
            data.tasks,
            data.initial_features,
            data.current_features,
            waiting=signals.waiting,
            scope_drift=signals.scope_drift,
        )
    except Exception as e:
        logger.warning("task_prioritization_failed", error=str(e))

    gated = gate_tasks_by_signal(
        prioritized, saturation, data.initial_features, data.current_features
    )

    narrative, ai_powered = await _resolve_narrative(
        data, assessment, saturation.block_reason or "", narrator
    )

    logger.info(
        "project_analyzed",
        project=data.project_name,
        probability=assessment.probability,
        active=len(gated.active),
        held=len(gated.held),
        ai_powered=ai_powered,
    )
    return assemble_result(assessment, gated, narrative, ai_powered)


def analyze(
    data: ProjectData,
    narrator: Optional[NarrativeGenerator] = None,
    today: Optional[date] = None,
) -> FinalResult:
    """Synchronous wrapper around :func:`analyze_project`."""
    return asyncio.run(analyze_project(data, narrator=narrator, today=today))
