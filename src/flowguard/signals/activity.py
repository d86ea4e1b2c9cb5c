"""Waiting and scope drift signals, computed from tasks and features alone."""

from typing import Iterable, List

from flowguard.models import ProjectData, ScopeDrift, TaskStatus
from flowguard.utils import clamp_score, round_half_up

WAITING_KEYWORDS = [
    "waiting", "blocked", "pending", "approval",
    "hold", "delay", "stuck", "need", "sign-off",
]

# Feature growth (percent) that maps to a full scope drift score
FULL_DRIFT_GROWTH_PERCENT = 50


def count_keyword_hits(texts: Iterable[str], keywords: List[str]) -> int:
    """Total keyword occurrences; one text can hit several keywords."""
    hits = 0
    for text in texts:
        lower = text.lower()
        hits += sum(1 for kw in keywords if kw in lower)
    return hits


def all_message_texts(data: ProjectData) -> List[str]:
    """Tracker messages followed by chat message texts."""
    return list(data.messages) + [m.text for m in data.chat_messages]


def compute_waiting_score(data: ProjectData) -> int:
    """Score how much work is stuck waiting on something.

    Blocked tasks add 20, otherwise tasks idle over 7 days add 15 and over
    3 days add 8. Each waiting keyword found in a message adds 6.
    """
    score = 0
    for task in data.tasks:
        if task.status == TaskStatus.BLOCKED:
            score += 20
        elif task.last_updated_days_ago > 7:
            score += 15
        elif task.last_updated_days_ago > 3:
            score += 8

    score += count_keyword_hits(all_message_texts(data), WAITING_KEYWORDS) * 6
    return clamp_score(score)


def compute_scope_drift_score(data: ProjectData) -> ScopeDrift:
    """Score feature growth over the initial scope.

    50% growth gives a score of 100.
    """
    initial = len(data.initial_features)
    current = len(data.current_features)
    added = max(0, current - initial)
    growth_percent = round_half_up(added / initial * 100) if initial > 0 else 0
    score = clamp_score(growth_percent / FULL_DRIFT_GROWTH_PERCENT * 100)
    return ScopeDrift(score=score, growth_percent=growth_percent)


def compute_delay_risk(waiting: int, scope_drift: int) -> int:
    """Delay risk from the two task-derived signals alone."""
    return clamp_score(waiting * 0.6 + scope_drift * 0.4)
