"""Unit tests for chat export parsing."""

from datetime import date

import pytest

from flowguard.parsers.chat import (
    extract_message_texts,
    normalize_chat_date,
    parse_chat_export,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12/02/2025", date(2025, 2, 12)),
        ("05/03/25", date(2025, 3, 5)),
        ("02/15/2025", date(2025, 2, 15)),
        ("1/2/2025", date(2025, 2, 1)),
    ],
)
def test_normalize_chat_date(raw, expected):
    """Test day-first dates, with month-first accepted when unambiguous."""
    assert normalize_chat_date(raw) == expected


@pytest.mark.parametrize("raw", ["31/02/2025", "13/13/2025", "12-02-2025", "aa/bb/cc"])
def test_normalize_chat_date_invalid(raw):
    """Test that impossible or malformed dates give None."""
    assert normalize_chat_date(raw) is None


def test_parse_dash_layout():
    """Test the 'date, time - author: text' layout."""
    text = "12/02/2025, 09:14 - Dev A: waiting on design sign-off"

    messages = parse_chat_export(text)

    assert len(messages) == 1
    assert messages[0].date == date(2025, 2, 12)
    assert messages[0].author == "Dev A"
    assert messages[0].text == "waiting on design sign-off"


def test_parse_bracket_layout_with_seconds_and_ampm():
    """Test the '[date, time] author: text' layout."""
    text = "[3/4/25, 9:14:33 PM] Dev B: blocked by backend"

    messages = parse_chat_export(text)

    assert len(messages) == 1
    assert messages[0].date == date(2025, 4, 3)
    assert messages[0].author == "Dev B"
    assert messages[0].text == "blocked by backend"


def test_continuation_lines_join_previous_message():
    """Test that unmatched lines extend the preceding message."""
    text = (
        "12/02/2025, 09:14 - Dev A: first line\n"
        "second line\n"
        "third line\n"
        "13/02/2025, 10:00 - Dev B: next message\n"
    )

    messages = parse_chat_export(text)

    assert len(messages) == 2
    assert messages[0].text == "first line\nsecond line\nthird line"
    assert messages[1].text == "next message"


def test_leading_unmatched_lines_are_dropped():
    """Test that text before the first message is ignored."""
    text = "orphan line\n12/02/2025, 09:14 - Dev A: hello"

    messages = parse_chat_export(text)

    assert len(messages) == 1
    assert messages[0].text == "hello"


def test_system_notices_are_skipped():
    """Test that export notices are not treated as continuations."""
    text = (
        "12/02/2025, 09:13 - Messages and calls are end-to-end encrypted.\n"
        "12/02/2025, 09:14 - Dev A: hello\n"
        "<Media omitted>\n"
    )

    messages = parse_chat_export(text)

    assert len(messages) == 1
    assert messages[0].text == "hello"


def test_invalid_date_line_is_dropped():
    """Test that a matched line with an impossible date is skipped."""
    text = (
        "31/02/2025, 09:14 - Dev A: never happened\n"
        "12/02/2025, 09:14 - Dev B: real message\n"
    )

    messages = parse_chat_export(text)

    assert [m.author for m in messages] == ["Dev B"]


def test_message_count_matches_header_lines():
    """Test one message per well-formed header line."""
    lines = [f"{day:02d}/03/2025, 10:00 - Dev {day}: update {day}" for day in range(1, 8)]
    text = "\n".join(lines)

    messages = parse_chat_export(text)

    assert len(messages) == 7
    assert [m.date.day for m in messages] == list(range(1, 8))


def test_empty_export():
    """Test empty input."""
    assert parse_chat_export("") == []
    assert parse_chat_export("\n\n") == []


def test_extract_message_texts():
    """Test extracting plain texts."""
    messages = parse_chat_export(
        "12/02/2025, 09:14 - Dev A: one\n13/02/2025, 09:14 - Dev B: two"
    )

    assert extract_message_texts(messages) == ["one", "two"]
