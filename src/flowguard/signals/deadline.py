"""Combines the five signals into a deadline extension probability."""

from datetime import date
from typing import Callable, Dict, Optional, TypeVar

import pandas as pd
import structlog

from flowguard.models import (
    DeadlineAssessment,
    FinancialSummary,
    ProjectData,
    RiskLevel,
    ScopeDrift,
    SignalBreakdown,
)
from flowguard.signals.activity import compute_scope_drift_score, compute_waiting_score
from flowguard.signals.communication import compute_communication_gap_score
from flowguard.signals.financial import compute_budget_burn_score, compute_financial_health
from flowguard.signals.velocity import compute_commit_velocity_score
from flowguard.utils import clamp_score

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Assumed length of the project, used to turn days left into a percentage
PROJECT_WINDOW_DAYS = 60
DEFAULT_TIME_REMAINING_PERCENT = 50

# Weights by number of optional sources (commits, chat, budget) present.
# With fewer real sources, waiting and scope drift carry more of the weight.
SIGNAL_WEIGHTS: Dict[int, Dict[str, float]] = {
    0: {"waiting": 0.60, "scope_drift": 0.40},
    1: {"waiting": 0.35, "scope_drift": 0.30, "commit_velocity": 0.20, "communication_gap": 0.15},
    2: {
        "waiting": 0.30,
        "scope_drift": 0.25,
        "commit_velocity": 0.22,
        "communication_gap": 0.18,
        "budget_burn": 0.05,
    },
    3: {
        "waiting": 0.28,
        "scope_drift": 0.22,
        "commit_velocity": 0.22,
        "communication_gap": 0.18,
        "budget_burn": 0.10,
    },
}


def parse_release_date(raw: str) -> Optional[date]:
    """Parse a release date such as ``2025-03-15``, ``2025/03/15`` or ``March 15, 2025``.

    Full timestamps are accepted; only the calendar date is kept.
    """
    if not raw or not raw.strip():
        return None
    parsed = pd.to_datetime(raw.strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def compute_time_remaining_percent(release_date: str, today: Optional[date] = None) -> int:
    """Share of the assumed project window still left before release.

    Invalid release dates give 50.
    """
    release = parse_release_date(release_date)
    if release is None:
        return DEFAULT_TIME_REMAINING_PERCENT

    today = today or date.today()
    days_left = max(0, (release - today).days)
    return clamp_score(days_left / PROJECT_WINDOW_DAYS * 100)


def confidence_for(source_count: int) -> RiskLevel:
    if source_count >= 3:
        return RiskLevel.HIGH
    if source_count == 2:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def combine_signals(signals: SignalBreakdown, source_count: int) -> int:
    """Weighted combination of the signals for the given source count."""
    weights = SIGNAL_WEIGHTS[max(0, min(3, source_count))]
    values = signals.model_dump()
    return clamp_score(sum(weight * values[name] for name, weight in weights.items()))


def _guarded(name: str, compute: Callable[..., T], default: T, *args, **kwargs) -> T:
    try:
        return compute(*args, **kwargs)
    except Exception as e:
        logger.warning("signal_computation_failed", signal=name, error=str(e))
        return default


def compute_deadline_assessment(
    data: ProjectData,
    today: Optional[date] = None,
) -> DeadlineAssessment:
    """Compute every signal and combine them into a deadline assessment.

    The returned ``signals`` are the only values the rest of the pipeline
    may use for waiting and scope drift.

    Args:
        data: Project snapshot
        today: Reference date (defaults to today)

    Returns:
        DeadlineAssessment with probability, confidence and signal breakdown
    """
    today = today or date.today()

    waiting = _guarded("waiting", compute_waiting_score, 0, data)
    scope = _guarded("scope_drift", compute_scope_drift_score, ScopeDrift(), data)

    commit_signal = 0
    if data.commits:
        commit_signal = _guarded(
            "commit_velocity", compute_commit_velocity_score, 0, data.commits, today=today
        )

    communication_signal = _guarded(
        "communication_gap",
        compute_communication_gap_score,
        0,
        data.chat_messages,
        data.messages,
    )

    time_remaining = _guarded(
        "time_remaining",
        compute_time_remaining_percent,
        DEFAULT_TIME_REMAINING_PERCENT,
        data.release_date,
        today=today,
    )

    financial = FinancialSummary()
    budget_signal = 0
    if data.budget_items:
        financial = _guarded(
            "budget_burn",
            compute_financial_health,
            FinancialSummary(),
            data.budget_items,
            time_remaining,
        )
        budget_signal = compute_budget_burn_score(financial)

    signals = SignalBreakdown(
        waiting=waiting,
        scope_drift=scope.score,
        commit_velocity=commit_signal,
        budget_burn=budget_signal,
        communication_gap=communication_signal,
    )

    source_count = data.source_count()
    probability = combine_signals(signals, source_count)

    logger.info(
        "deadline_assessed",
        probability=probability,
        source_count=source_count,
        waiting=signals.waiting,
        scope_drift=signals.scope_drift,
    )

    return DeadlineAssessment(
        probability=probability,
        confidence=confidence_for(source_count),
        signals=signals,
        time_remaining_percent=time_remaining,
        budget_burn_percent=financial.burn_percent,
        financial_risk=financial.financial_risk,
        wasted_hours=financial.wasted_hours,
        wasted_cost=financial.wasted_cost,
        source_count=source_count,
        scope_growth_percent=scope.growth_percent,
    )
