"""Parsers that turn raw exports into typed records."""

from flowguard.parsers.budget import load_workbook, parse_budget_rows, parse_budget_sheet
from flowguard.parsers.chat import extract_message_texts, normalize_chat_date, parse_chat_export
from flowguard.parsers.commits import (
    RepositoryCommitReader,
    parse_commit_csv,
    read_repository_commits,
)

__all__ = [
    "parse_commit_csv",
    "read_repository_commits",
    "RepositoryCommitReader",
    "parse_chat_export",
    "normalize_chat_date",
    "extract_message_texts",
    "load_workbook",
    "parse_budget_sheet",
    "parse_budget_rows",
]
