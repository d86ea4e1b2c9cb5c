"""Communication gap signals from chat exports and tracker messages."""

from typing import List

from flowguard.models import ChatMessage
from flowguard.signals.activity import count_keyword_hits
from flowguard.utils import clamp_score

BLOCKING_KEYWORDS = [
    "waiting", "blocked", "pending", "approval",
    "delay", "stuck", "hold", "can we add", "scope", "new feature",
]

# Used when there is no chat export, only plain tracker messages
FALLBACK_KEYWORDS = ["waiting", "blocked", "pending", "approval", "delay", "stuck"]


def detect_communication_gaps(messages: List[ChatMessage]) -> int:
    """Largest gap in days between adjacent distinct message dates."""
    if len(messages) < 2:
        return 0

    dates = sorted({m.date for m in messages})
    return max(
        ((curr - prev).days for prev, curr in zip(dates, dates[1:])),
        default=0,
    )


def count_blocking_signals(messages: List[ChatMessage]) -> int:
    """Total blocking keyword occurrences across chat messages."""
    return count_keyword_hits((m.text for m in messages), BLOCKING_KEYWORDS)


def compute_communication_gap_score(
    chat_messages: List[ChatMessage],
    messages: List[str],
) -> int:
    """Score silence and blocking chatter in team communication.

    With a chat export: 8 points per day of the largest gap plus 4 per
    blocking keyword. Without one, 12 points per tracker message mentioning
    a waiting-style keyword.
    """
    if chat_messages:
        max_gap = detect_communication_gaps(chat_messages)
        blocking = count_blocking_signals(chat_messages)
        return clamp_score(max_gap * 8 + blocking * 4)

    if messages:
        hits = sum(
            1 for m in messages if any(kw in m.lower() for kw in FALLBACK_KEYWORDS)
        )
        return clamp_score(hits * 12)

    return 0
