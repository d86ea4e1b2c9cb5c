"""Commit velocity and risky commit patterns."""

from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional

from flowguard.models import CommitVelocity, GitCommit, RiskyCommitSignals, WeeklyCommitCount
from flowguard.utils import clamp_score, round_half_up

RISKY_KEYWORDS = ["hotfix", "fix", "bug", "wip", "revert", "broken", "urgent"]
WIP_KEYWORDS = ["wip", "work in progress", "incomplete"]

SILENT_AUTHOR_DAYS = 7
MAX_STALENESS_PENALTY = 30


def week_start(day: date) -> date:
    """The Sunday on or before ``day``."""
    # weekday(): Monday is 0, Sunday is 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def get_commit_velocity(commits: List[GitCommit]) -> CommitVelocity:
    """Weekly commit counts and the velocity drop across the timeline.

    Only weeks that have commits are counted. The first half of those weeks
    is compared with the second half; with fewer than two weeks the drop
    is 0.
    """
    if not commits:
        return CommitVelocity()

    per_week: Dict[date, int] = Counter(week_start(c.date) for c in commits)
    weekly = [
        WeeklyCommitCount(week=f"W{i + 1}", count=per_week[start])
        for i, start in enumerate(sorted(per_week))
    ]

    mid = len(weekly) // 2
    if mid == 0:
        return CommitVelocity(weekly_commits=weekly, velocity_drop_percent=0)

    first_avg = sum(w.count for w in weekly[:mid]) / mid
    second_avg = sum(w.count for w in weekly[mid:]) / (len(weekly) - mid)

    drop = 0
    if first_avg > 0:
        drop = max(0, round_half_up((first_avg - second_avg) / first_avg * 100))

    return CommitVelocity(weekly_commits=weekly, velocity_drop_percent=drop)


def get_risky_commit_signals(
    commits: List[GitCommit],
    today: Optional[date] = None,
) -> RiskyCommitSignals:
    """Count hotfix-style and WIP commits and measure commit staleness.

    A commit can count as both hotfix-style and WIP.
    """
    if not commits:
        return RiskyCommitSignals()

    today = today or date.today()
    hotfix_count = 0
    wip_count = 0
    last_commit: Dict[str, date] = {}

    for commit in commits:
        lower = commit.message.lower()
        if any(kw in lower for kw in RISKY_KEYWORDS):
            hotfix_count += 1
        if any(kw in lower for kw in WIP_KEYWORDS):
            wip_count += 1

        seen = last_commit.get(commit.author)
        if seen is None or commit.date > seen:
            last_commit[commit.author] = commit.date

    author_counts = Counter(c.author for c in commits)
    most_active_author = author_counts.most_common(1)[0][0]

    latest = max(last_commit.values())
    days_since_last_commit = max(0, (today - latest).days)

    silent_authors = [
        author
        for author, day in last_commit.items()
        if (today - day).days > SILENT_AUTHOR_DAYS
    ]

    return RiskyCommitSignals(
        hotfix_count=hotfix_count,
        wip_count=wip_count,
        days_since_last_commit=days_since_last_commit,
        most_active_author=most_active_author,
        silent_authors=silent_authors,
    )


def compute_commit_velocity_score(
    commits: List[GitCommit],
    today: Optional[date] = None,
) -> int:
    """Score commit-log health: velocity drop plus risky pattern bonuses."""
    if not commits:
        return 0

    velocity = get_commit_velocity(commits)
    risky = get_risky_commit_signals(commits, today=today)
    return clamp_score(
        velocity.velocity_drop_percent
        + risky.hotfix_count * 5
        + risky.wip_count * 8
        + min(risky.days_since_last_commit * 3, MAX_STALENESS_PENALTY)
    )
