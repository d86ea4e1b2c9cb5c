"""Commit history parsing.

Commits can come from a CSV export of the commit log, for example::

    git log --pretty=format:"%H,%an,%ad,%s" --date=short > commits.csv

(with a ``sha,author,date,message`` header row added), or straight from a
local Git repository.
"""

import io
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import git
import pandas as pd
import structlog
from git import Commit, Repo

from flowguard.models import GitCommit

logger = structlog.get_logger(__name__)

# Accepted header names per field, checked in order
HEADER_ALIASES: Dict[str, tuple] = {
    "sha": ("sha", "hash"),
    "author": ("author", "author_name"),
    "date": ("date", "authored_date"),
    "message": ("message", "commit_message"),
}

_WHITESPACE = re.compile(r"\s+")


def _normalize_header(header: str) -> str:
    return _WHITESPACE.sub("_", str(header).strip().lower())


def _first_value(row: Dict[str, str], field: str) -> str:
    for alias in HEADER_ALIASES[field]:
        value = row.get(alias)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def _parse_date(raw: str):
    if not raw:
        return None
    parsed = pd.to_datetime(raw, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_commit_csv(text: str) -> List[GitCommit]:
    """Parse a commit log exported as CSV with a header row.

    Header names are matched case-insensitively against ``HEADER_ALIASES``.
    Quoted fields may contain commas. Rows whose date is missing or cannot
    be parsed are dropped. Malformed input gives an empty list rather than
    an error.

    Args:
        text: Raw CSV text

    Returns:
        Parsed commits in file order
    """
    if not text or not text.strip():
        return []

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            on_bad_lines="skip",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
        logger.warning("commit_csv_unparsable", error=str(e))
        return []

    frame.columns = [_normalize_header(c) for c in frame.columns]

    commits = []
    dropped = 0
    for row in frame.to_dict(orient="records"):
        commit_date = _parse_date(_first_value(row, "date"))
        if commit_date is None:
            dropped += 1
            continue
        commits.append(
            GitCommit(
                sha=_first_value(row, "sha") or "unknown",
                author=_first_value(row, "author") or "Unknown",
                date=commit_date,
                message=_first_value(row, "message"),
            )
        )

    if dropped:
        logger.debug("commit_rows_dropped", count=dropped, reason="missing_or_invalid_date")
    logger.info("parsed_commit_csv", commits=len(commits))
    return commits


class RepositoryCommitReader:
    """Reads commit history from a local Git repository."""

    def __init__(self, repo_path: Path) -> None:
        """Initialize the reader.

        Args:
            repo_path: Path to the Git repository

        Raises:
            ValueError: If repository path is invalid
        """
        self.repo_path = Path(repo_path)
        if not self.repo_path.exists():
            raise ValueError(f"Repository path does not exist: {self.repo_path}")

        try:
            self.repo = Repo(self.repo_path)
        except git.exc.InvalidGitRepositoryError as e:
            raise ValueError(f"Invalid Git repository: {self.repo_path}") from e

    def iter_commits(
        self,
        branch: str = "HEAD",
        max_count: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> Iterator[GitCommit]:
        """Yield commits reachable from ``branch``, newest first.

        Args:
            branch: Branch name or revision (default: HEAD)
            max_count: Maximum number of commits to read
            since: Only commits after this date
        """
        kwargs = {}
        if max_count:
            kwargs["max_count"] = max_count
        if since:
            kwargs["since"] = since

        for commit in self.repo.iter_commits(branch, **kwargs):
            yield self._to_git_commit(commit)

    def _to_git_commit(self, commit: Commit) -> GitCommit:
        message_lines = commit.message.strip().split("\n")
        return GitCommit(
            sha=commit.hexsha,
            author=commit.author.name or "Unknown",
            date=datetime.fromtimestamp(commit.authored_date).date(),
            message=message_lines[0] if message_lines else "",
        )


def read_repository_commits(
    repo_path: Path,
    branch: str = "HEAD",
    max_count: Optional[int] = None,
    since: Optional[datetime] = None,
) -> List[GitCommit]:
    """Read commits from a local repository into a list.

    Raises:
        ValueError: If the path is not a Git repository
    """
    reader = RepositoryCommitReader(repo_path)
    commits = list(reader.iter_commits(branch=branch, max_count=max_count, since=since))
    logger.info("read_repository_commits", repo=str(repo_path), commits=len(commits))
    return commits
