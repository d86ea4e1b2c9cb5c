"""Data models for project snapshots and analysis results."""

from flowguard.models.analysis import (
    CommitVelocity,
    DeadlineAssessment,
    FinalResult,
    FinancialSummary,
    GatedTaskList,
    Narrative,
    PrioritizedTask,
    Priority,
    RiskLevel,
    RiskyCommitSignals,
    SaturationLevel,
    SaturationState,
    ScopeDrift,
    SignalBreakdown,
    SignalSaturation,
    WeeklyCommitCount,
)
from flowguard.models.config import LLMConfig, Settings
from flowguard.models.project import (
    BudgetItem,
    BudgetStatus,
    ChatMessage,
    GitCommit,
    ProjectData,
    Task,
    TaskStatus,
)

__all__ = [
    "Task",
    "TaskStatus",
    "GitCommit",
    "ChatMessage",
    "BudgetItem",
    "BudgetStatus",
    "ProjectData",
    "Priority",
    "RiskLevel",
    "SaturationLevel",
    "PrioritizedTask",
    "SignalBreakdown",
    "ScopeDrift",
    "WeeklyCommitCount",
    "CommitVelocity",
    "RiskyCommitSignals",
    "FinancialSummary",
    "DeadlineAssessment",
    "SignalSaturation",
    "SaturationState",
    "GatedTaskList",
    "Narrative",
    "FinalResult",
    "LLMConfig",
    "Settings",
]
