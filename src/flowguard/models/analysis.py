"""Data models produced by an analysis run."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Priority(str, Enum):
    """Priority label assigned by the task prioritizer."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class RiskLevel(str, Enum):
    """Qualitative level used for confidence and financial risk."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SaturationLevel(str, Enum):
    """How close a signal is to triggering the scope freeze."""

    CLEAR = "CLEAR"
    WARNING = "WARNING"
    SATURATED = "SATURATED"


class PrioritizedTask(BaseModel):
    """A task ranked for the release manager. Created fresh per run."""

    title: str = Field(..., description="Task title")
    assigned_to: str = Field("", description="Assignee name")
    priority: Priority = Field(..., description="Priority label")
    reason: str = Field(..., description="Human-readable explanation of the priority")
    status: str = Field(..., description="Task status")
    blocks_count: int = Field(0, description="Number of tasks this task blocks")
    days_idle: int = Field(0, description="Days since the task was last updated")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "title": "Implement Payments API",
                "assigned_to": "Dev A",
                "priority": "CRITICAL",
                "reason": "Blocks 2 other task(s). Currently blocked, needs immediate unblocking.",
                "status": "Blocked",
                "blocks_count": 2,
                "days_idle": 6,
            }
        }


class SignalBreakdown(BaseModel):
    """The five 0-100 signals. Shared by the display and the saturation gate."""

    waiting: int = Field(0, ge=0, le=100)
    scope_drift: int = Field(0, ge=0, le=100)
    commit_velocity: int = Field(0, ge=0, le=100)
    budget_burn: int = Field(0, ge=0, le=100)
    communication_gap: int = Field(0, ge=0, le=100)


class ScopeDrift(BaseModel):
    """Scope drift score together with the raw feature growth."""

    score: int = Field(0, ge=0, le=100)
    growth_percent: int = Field(0, ge=0, description="Feature growth over the initial scope, in percent")


class WeeklyCommitCount(BaseModel):
    """Commit count for one calendar week that has commits."""

    week: str
    count: int


class CommitVelocity(BaseModel):
    """Commits per week and the drop between the two halves of the timeline."""

    weekly_commits: List[WeeklyCommitCount] = Field(default_factory=list)
    velocity_drop_percent: int = 0


class RiskyCommitSignals(BaseModel):
    """Patterns in the commit log that point at instability."""

    hotfix_count: int = 0
    wip_count: int = 0
    days_since_last_commit: int = 0
    most_active_author: str = ""
    silent_authors: List[str] = Field(default_factory=list)


class FinancialSummary(BaseModel):
    """Cost roll-up of the budget sheet."""

    total_budgeted_cost: float = 0
    total_spent_cost: float = 0
    burn_percent: int = 0
    over_burn: int = Field(0, description="Burn percent minus percent of time already used")
    wasted_hours: float = 0
    wasted_cost: float = 0
    blocked_cost: float = Field(0, description="Spend on items that are currently blocked")
    financial_risk: RiskLevel = RiskLevel.LOW
    top_waste_item: str = ""


class DeadlineAssessment(BaseModel):
    """Combined probability of missing the deadline, with its inputs."""

    probability: int = Field(..., ge=0, le=100, description="Chance of needing a deadline extension")
    confidence: RiskLevel = Field(..., description="How many data sources informed the estimate")
    signals: SignalBreakdown = Field(default_factory=SignalBreakdown)
    time_remaining_percent: int = Field(50, ge=0, le=100)
    budget_burn_percent: int = 0
    financial_risk: RiskLevel = RiskLevel.LOW
    wasted_hours: float = 0
    wasted_cost: float = 0
    source_count: int = Field(0, ge=0, le=3)
    scope_growth_percent: int = 0

    @classmethod
    def neutral(cls) -> "DeadlineAssessment":
        """Assessment used when the aggregator itself fails."""
        return cls(probability=50, confidence=RiskLevel.LOW, time_remaining_percent=50)


class SignalSaturation(BaseModel):
    """Saturation level of a single signal."""

    level: SaturationLevel
    score: int
    label: str
    icon: str


class SaturationState(BaseModel):
    """Gate state for one analysis run. Never persisted."""

    waiting: SignalSaturation
    scope_drift: SignalSaturation
    is_blocked: bool = False
    is_warning: bool = False
    initial_completion_rate: float = Field(1.0, ge=0, le=1)
    completion_gate_passed: bool = True
    block_reason: Optional[str] = None


class GatedTaskList(BaseModel):
    """Prioritized tasks split into those to work on and those on hold."""

    active: List[PrioritizedTask] = Field(default_factory=list)
    held: List[PrioritizedTask] = Field(default_factory=list)
    saturation: SaturationState


class Narrative(BaseModel):
    """Prose output from the heuristic generator or the external service.

    The numeric fields are only filled in by the external service. They are
    kept for reference and never override the deterministic scores.
    """

    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    delay_risk_score: Optional[float] = None
    waiting_score: Optional[float] = None
    scope_drift_score: Optional[float] = None
    scope_growth_percent: Optional[float] = None
    deadline_extension_probability: Optional[float] = None
    confidence: Optional[str] = None


class FinalResult(DeadlineAssessment):
    """Everything the release manager sees for one analysis run.

    ``ai_powered`` means the insight and recommendation text came from the
    external narrative service. Scores, probability and confidence are always
    the deterministic values, whatever the service returned.
    """

    delay_risk_score: int = 0
    waiting_score: int = 0
    scope_drift_score: int = 0
    deadline_extension_probability: int = 0
    prioritized_tasks: List[PrioritizedTask] = Field(default_factory=list)
    held_tasks: List[PrioritizedTask] = Field(default_factory=list)
    saturation: SaturationState
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    ai_powered: bool = Field(False, description="Narrative text came from the LLM; numbers never do")
