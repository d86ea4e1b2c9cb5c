"""Scores and ranks tasks by urgency and impact."""

from typing import List, Optional, Sequence, Tuple

from flowguard.matching import is_expansion_task
from flowguard.models import PrioritizedTask, Priority, Task, TaskStatus

DONE_SCORE = -100

# Signal levels at which expansion work is pushed down the list
SATURATED_SIGNAL = 80
ELEVATED_SIGNAL = 60
SATURATED_PENALTY = 40
ELEVATED_PENALTY = 20


def priority_for(score: int) -> Priority:
    if score >= 60:
        return Priority.CRITICAL
    if score >= 35:
        return Priority.HIGH
    if score >= 15:
        return Priority.MEDIUM
    return Priority.LOW


def expansion_penalty(waiting: int, scope_drift: int) -> Tuple[int, Optional[str]]:
    """Penalty for out-of-scope work given the current signal levels."""
    if waiting >= SATURATED_SIGNAL or scope_drift >= SATURATED_SIGNAL:
        return SATURATED_PENALTY, "saturated"
    if waiting >= ELEVATED_SIGNAL or scope_drift >= ELEVATED_SIGNAL:
        return ELEVATED_PENALTY, "elevated"
    return 0, None


def score_task(
    task: Task,
    initial_features: Sequence[str] = (),
    current_features: Sequence[str] = (),
    waiting: int = 0,
    scope_drift: int = 0,
) -> Tuple[int, str]:
    """Score one task and explain the score.

    Returns:
        Tuple of (score, reason)
    """
    if task.status == TaskStatus.DONE:
        return DONE_SCORE, "Already completed."

    score = 0
    reasons: List[str] = []
    hours = task.estimated_hours or 0

    blocks_count = len(task.blocks)
    score += blocks_count * 25
    if blocks_count > 0:
        reasons.append(f"Blocks {blocks_count} other task(s).")

    if task.status == TaskStatus.BLOCKED:
        score += 30
        reasons.append("Currently blocked, needs immediate unblocking.")

    if task.last_updated_days_ago > 7:
        score += 20
        reasons.append(f"Idle for {task.last_updated_days_ago} days.")
    elif task.last_updated_days_ago > 3:
        score += 10
        reasons.append(f"Stale for {task.last_updated_days_ago} days.")

    if hours > 20:
        score += 15
        reasons.append(f"Large task ({hours:g}h estimated).")

    if task.status == TaskStatus.NOT_STARTED and hours > 15:
        score += 20
        reasons.append("Not started, high effort task needs to begin now.")

    if is_expansion_task(task.title, initial_features, current_features):
        penalty, level = expansion_penalty(waiting, scope_drift)
        if penalty:
            score -= penalty
            reasons.append(f"Expansion scope: -{penalty} while signals are {level}.")

    return score, " ".join(reasons) or "Normal priority task."


def prioritize_tasks(
    tasks: Sequence[Task],
    initial_features: Sequence[str] = (),
    current_features: Sequence[str] = (),
    waiting: int = 0,
    scope_drift: int = 0,
) -> List[PrioritizedTask]:
    """Rank tasks, highest score first.

    Done tasks always sink to the bottom. Tasks that belong only to added
    scope lose 40 points when waiting or scope drift is at 80 or more, or
    20 points when either is at 60 or more. Input tasks are not modified.

    Args:
        tasks: Tasks to rank
        initial_features: Features in the original scope
        current_features: Features in the current scope
        waiting: Authoritative waiting signal
        scope_drift: Authoritative scope drift signal

    Returns:
        New PrioritizedTask records in ranked order
    """
    scored = []
    for task in tasks:
        score, reason = score_task(task, initial_features, current_features, waiting, scope_drift)
        scored.append(
            (
                score,
                PrioritizedTask(
                    title=task.title,
                    assigned_to=task.assigned_to,
                    priority=priority_for(score),
                    reason=reason,
                    status=task.status.value,
                    blocks_count=len(task.blocks),
                    days_idle=task.last_updated_days_ago,
                ),
            )
        )

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [task for _, task in scored]
