"""Chat export parsing.

Two line layouts are recognised (seconds and AM/PM are optional)::

    12/02/2025, 09:14 - Dev A: message text here
    [12/02/2025, 09:14] Dev A: message text here

Any other line continues the previous message, because exports break long
messages over several lines.
"""

import re
from datetime import date
from typing import List, Optional

import structlog

from flowguard.models import ChatMessage

logger = structlog.get_logger(__name__)

LINE_PATTERNS = [
    re.compile(
        r"^(\d{1,2}/\d{1,2}/\d{2,4}),?\s+\d{1,2}:\d{2}(?::\d{2})?\s*(?:AM|PM)?\s*[-–]\s+([^:]+):\s+(.+)$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^\[(\d{1,2}/\d{1,2}/\d{2,4}),?\s+\d{1,2}:\d{2}(?::\d{2})?\s*(?:AM|PM)?\]\s+([^:]+):\s+(.+)$",
        re.IGNORECASE,
    ),
]

# A timestamp with no sender, as used by system notices
_TIMESTAMP_PREFIX = re.compile(
    r"^\[?\d{1,2}/\d{1,2}/\d{2,4},?\s+\d{1,2}:\d{2}(?::\d{2})?\s*(?:AM|PM)?\]?\s*[-–]?\s*",
    re.IGNORECASE,
)

SYSTEM_NOTICE_PREFIXES = (
    "messages and calls are end-to-end encrypted",
    "this message was deleted",
    "you deleted this message",
    "<media omitted>",
    "image omitted",
    "video omitted",
    "audio omitted",
    "sticker omitted",
    "document omitted",
    "gif omitted",
    "missed voice call",
    "missed video call",
)


def normalize_chat_date(raw: str) -> Optional[date]:
    """Convert an export date like ``12/02/25`` to a calendar date.

    Day-first is assumed. If exactly one of the first two fields is above 12,
    that field is taken as the day. Two-digit years become ``20YY``. Dates
    that are ambiguous (both fields 12 or below) stay day-first even when the
    export was written month-first.

    Returns:
        The date, or None if the fields cannot form a real date
    """
    parts = raw.split("/")
    if len(parts) != 3:
        return None
    a, b, c = parts

    try:
        num_a = int(a)
        num_b = int(b)
        year = int(f"20{c}" if len(c) == 2 else c)
    except ValueError:
        return None

    if num_b > 12 and num_a <= 12:
        day, month = num_b, num_a
    else:
        day, month = num_a, num_b

    try:
        return date(year, month, day)
    except ValueError:
        return None


def _is_system_notice(line: str) -> bool:
    candidates = (line.lower(), _TIMESTAMP_PREFIX.sub("", line).lower())
    return any(c.startswith(SYSTEM_NOTICE_PREFIXES) for c in candidates)


def parse_chat_export(text: str) -> List[ChatMessage]:
    """Parse a chat export into messages.

    Args:
        text: Raw export text

    Returns:
        One message per matched line. Continuation lines are joined onto the
        preceding message with a newline.
    """
    messages: List[ChatMessage] = []
    if not text:
        return messages

    skipped = 0
    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue

        match = None
        for pattern in LINE_PATTERNS:
            match = pattern.match(trimmed)
            if match:
                break

        if match:
            sent_on = normalize_chat_date(match.group(1))
            if sent_on is None:
                logger.debug("chat_line_invalid_date", raw_date=match.group(1))
                skipped += 1
                continue
            messages.append(
                ChatMessage(
                    date=sent_on,
                    author=match.group(2).strip(),
                    text=match.group(3).strip(),
                )
            )
            continue

        if _is_system_notice(trimmed):
            continue

        if messages:
            previous = messages[-1]
            messages[-1] = previous.model_copy(update={"text": f"{previous.text}\n{trimmed}"})

    if skipped:
        logger.debug("chat_lines_skipped", count=skipped)
    logger.info("parsed_chat_export", messages=len(messages))
    return messages


def extract_message_texts(messages: List[ChatMessage]) -> List[str]:
    """Plain message texts, for scoring alongside tracker messages."""
    return [m.text for m in messages]
