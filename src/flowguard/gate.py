"""Saturation gate: freezes scope expansion while bottleneck signals are high.

Each of the waiting and scope drift signals is CLEAR below 50, WARNING from
50 and SATURATED from 75. A saturated signal blocks: expansion tasks are held
until 70% of the initial work is done. A warning only queues lower-priority
expansion tasks.
"""

from typing import List, Sequence

import structlog

from flowguard.matching import added_features, is_expansion_task, is_initial_task
from flowguard.models import (
    GatedTaskList,
    PrioritizedTask,
    Priority,
    SaturationLevel,
    SaturationState,
    SignalBreakdown,
    SignalSaturation,
    Task,
    TaskStatus,
)
from flowguard.utils import round_half_up

logger = structlog.get_logger(__name__)

SATURATION_THRESHOLDS = {
    # Below 80 so that moderately stressed projects still trip the gate
    "HARD_BLOCK": 75,
    "SOFT_WARN": 50,
    "INITIAL_COMPLETION_GATE": 0.70,
}

_GATE_PERCENT = round_half_up(SATURATION_THRESHOLDS["INITIAL_COMPLETION_GATE"] * 100)


def to_level(score: int) -> SaturationLevel:
    if score >= SATURATION_THRESHOLDS["HARD_BLOCK"]:
        return SaturationLevel.SATURATED
    if score >= SATURATION_THRESHOLDS["SOFT_WARN"]:
        return SaturationLevel.WARNING
    return SaturationLevel.CLEAR


def signal_saturation(score: int, label: str, icon: str) -> SignalSaturation:
    return SignalSaturation(level=to_level(score), score=score, label=label, icon=icon)


def initial_completion_rate(tasks: Sequence[Task], initial_features: Sequence[str]) -> float:
    """Fraction of initial-scope tasks that are done.

    If no task matches an initial feature, all tasks are counted. With no
    tasks at all the rate is 1.0.
    """
    pool = [t for t in tasks if is_initial_task(t.title, initial_features)] or list(tasks)
    if not pool:
        return 1.0
    done = sum(1 for t in pool if t.status == TaskStatus.DONE)
    return done / len(pool)


def evaluate_saturation(
    signals: SignalBreakdown,
    tasks: Sequence[Task],
    initial_features: Sequence[str],
    current_features: Sequence[str],
) -> SaturationState:
    """Evaluate the gate from the authoritative signal breakdown.

    Args:
        signals: Signals from the deadline assessment
        tasks: Input tasks
        initial_features: Features in the original scope
        current_features: Features in the current scope

    Returns:
        SaturationState for this run
    """
    waiting = signal_saturation(signals.waiting, "Waiting Bottlenecks", "⏳")
    scope_drift = signal_saturation(signals.scope_drift, "Scope Drift", "📈")

    is_blocked = SaturationLevel.SATURATED in (waiting.level, scope_drift.level)
    is_warning = not is_blocked and SaturationLevel.WARNING in (waiting.level, scope_drift.level)

    rate = initial_completion_rate(tasks, initial_features)
    gate_passed = rate >= SATURATION_THRESHOLDS["INITIAL_COMPLETION_GATE"]
    completion_percent = round_half_up(rate * 100)

    block_reason = None
    if is_blocked:
        parts = []
        if waiting.level == SaturationLevel.SATURATED:
            parts.append(f"Waiting ({waiting.score}/100)")
        if scope_drift.level == SaturationLevel.SATURATED:
            parts.append(f"Scope Drift ({scope_drift.score}/100)")

        added_count = len(added_features(initial_features, current_features))
        block_reason = (
            f"{' & '.join(parts)} reached saturation. "
            f"New tasks are held until {_GATE_PERCENT}% of initial work is Done "
            f"(currently {completion_percent}%)."
        )
        if added_count > 0:
            block_reason += f" {added_count} expansion feature(s) are queued and frozen."
    elif is_warning and not gate_passed:
        block_reason = (
            "Signals are elevated. Focus on initial tasks before expanding scope "
            f"({completion_percent}% done, target {_GATE_PERCENT}%)."
        )

    return SaturationState(
        waiting=waiting,
        scope_drift=scope_drift,
        is_blocked=is_blocked,
        is_warning=is_warning,
        initial_completion_rate=rate,
        completion_gate_passed=gate_passed,
        block_reason=block_reason,
    )


def release_if_starved(
    prioritized: Sequence[PrioritizedTask],
    gated: GatedTaskList,
) -> GatedTaskList:
    """Undo the hold when it would leave no open work on the active list.

    Overly broad feature matching can classify every open task as expansion.
    Rather than show an empty list, the hold is abandoned and the original
    ranking is returned with nothing held.
    """
    open_active = [t for t in gated.active if t.status != TaskStatus.DONE.value]
    if open_active or not gated.held:
        return gated

    logger.warning("gate_released_all_tasks", held=len(gated.held))
    return GatedTaskList(active=list(prioritized), held=[], saturation=gated.saturation)


def gate_tasks_by_signal(
    prioritized: Sequence[PrioritizedTask],
    saturation: SaturationState,
    initial_features: Sequence[str],
    current_features: Sequence[str],
) -> GatedTaskList:
    """Split prioritized tasks into active and held lists.

    Done tasks are always active. When blocked, every expansion task is held.
    When only warning, MEDIUM and LOW expansion tasks are queued. This is a
    pure function of its inputs.
    """
    if not saturation.is_blocked and not saturation.is_warning:
        return GatedTaskList(active=list(prioritized), held=[], saturation=saturation)

    active: List[PrioritizedTask] = []
    held: List[PrioritizedTask] = []

    for task in prioritized:
        if task.status == TaskStatus.DONE.value:
            active.append(task)
            continue

        expansion = is_expansion_task(task.title, initial_features, current_features)

        if saturation.is_blocked and expansion:
            held.append(
                task.model_copy(
                    update={
                        "reason": f"[HELD] {task.reason} Frozen until "
                        f"{_GATE_PERCENT}% initial completion."
                    }
                )
            )
        elif (
            saturation.is_warning
            and expansion
            and task.priority in (Priority.MEDIUM, Priority.LOW)
        ):
            held.append(
                task.model_copy(
                    update={
                        "reason": f"[QUEUED] {task.reason} Deprioritised while signals are elevated."
                    }
                )
            )
        else:
            active.append(task)

    gated = GatedTaskList(active=active, held=held, saturation=saturation)
    return release_if_starved(prioritized, gated)


def generate_saturation_insights(saturation: SaturationState) -> List[str]:
    """Fixed editorial insights for the current gate state."""
    insights = []
    if saturation.is_blocked:
        if saturation.waiting.level == SaturationLevel.SATURATED:
            insights.append(
                f"Waiting signal is at {saturation.waiting.score}/100, the queue is saturated. "
                "No new tasks should start until bottlenecks are resolved."
            )
        if saturation.scope_drift.level == SaturationLevel.SATURATED:
            insights.append(
                f"Scope Drift is at {saturation.scope_drift.score}/100, the project has grown "
                "beyond safe limits. Scope additions are frozen until initial deliverables "
                f"reach {_GATE_PERCENT}% completion."
            )
        insights.append(
            f"Initial task completion: {round_half_up(saturation.initial_completion_rate * 100)}%. "
            f"Hold gate lifts automatically at {_GATE_PERCENT}%."
        )
    elif saturation.is_warning:
        insights.append(
            "Signals approaching saturation. Lower-priority expansion work has been queued. "
            "Resolve bottlenecks now to avoid a full hold."
        )
    return insights


def generate_saturation_recommendations(saturation: SaturationState) -> List[str]:
    """Fixed editorial recommendations for the current gate state."""
    recs = []
    if saturation.is_blocked:
        recs.append("Enforce scope freeze immediately: no new features until the hold gate clears.")
        recs.append("Assign every blocked or stale task a dedicated owner with a 48-hour deadline.")
        if saturation.waiting.level == SaturationLevel.SATURATED:
            recs.append("Run a daily 15-min unblocking standup targeting the approval chain.")
        if saturation.scope_drift.level == SaturationLevel.SATURATED:
            recs.append("Move all held expansion tasks to the next-version backlog and notify stakeholders.")
        recs.append(
            f"Track completion daily: it must reach {_GATE_PERCENT}% before new work is admitted."
        )
    elif saturation.is_warning:
        recs.append("Signals elevated: deprioritise new scope until current work stabilises.")
        recs.append("Do not start queued expansion tasks until the next sprint review.")
    return recs
