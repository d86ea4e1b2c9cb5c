"""Signal computers: each turns one data source into a 0-100 score."""

from flowguard.signals.activity import (
    WAITING_KEYWORDS,
    compute_delay_risk,
    compute_scope_drift_score,
    compute_waiting_score,
)
from flowguard.signals.communication import (
    compute_communication_gap_score,
    count_blocking_signals,
    detect_communication_gaps,
)
from flowguard.signals.deadline import (
    SIGNAL_WEIGHTS,
    compute_deadline_assessment,
    compute_time_remaining_percent,
)
from flowguard.signals.financial import compute_budget_burn_score, compute_financial_health
from flowguard.signals.velocity import (
    compute_commit_velocity_score,
    get_commit_velocity,
    get_risky_commit_signals,
)

__all__ = [
    "WAITING_KEYWORDS",
    "SIGNAL_WEIGHTS",
    "compute_waiting_score",
    "compute_scope_drift_score",
    "compute_delay_risk",
    "compute_commit_velocity_score",
    "get_commit_velocity",
    "get_risky_commit_signals",
    "compute_communication_gap_score",
    "detect_communication_gaps",
    "count_blocking_signals",
    "compute_financial_health",
    "compute_budget_burn_score",
    "compute_time_remaining_percent",
    "compute_deadline_assessment",
]
