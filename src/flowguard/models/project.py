"""Data models for project snapshots submitted for analysis."""

import re
import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flowguard.matching import added_features


class TaskStatus(str, Enum):
    """Lifecycle status of a tracked task."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    BLOCKED = "Blocked"
    DONE = "Done"

    @classmethod
    def parse(cls, raw: str) -> "TaskStatus":
        """Parse a status string, accepting spelling variants.

        ``NotStarted``, ``not_started`` and ``not-started`` all map to
        ``NOT_STARTED``.

        Raises:
            ValueError: If the string names no known status
        """
        key = re.sub(r"[\s_\-]", "", str(getattr(raw, "value", raw))).lower()
        for status in cls:
            if status.value.replace(" ", "").lower() == key:
                return status
        raise ValueError(f"Unknown task status: {raw!r}")


class BudgetStatus(str, Enum):
    """Status of a budget line item."""

    ACTIVE = "Active"
    BLOCKED = "Blocked"
    CUT = "Cut"
    DONE = "Done"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "BudgetStatus":
        """Parse a status string; blank or unknown values become ``ACTIVE``."""
        if raw is None:
            return cls.ACTIVE
        key = str(getattr(raw, "value", raw)).strip().lower()
        for status in cls:
            if status.value.lower() == key:
                return status
        return cls.ACTIVE


class Task(BaseModel):
    """A unit of work from the task tracker."""

    title: str = Field(..., description="Task title")
    assigned_to: str = Field("", description="Assignee name")
    status: TaskStatus = Field(..., description="Current task status")
    last_updated_days_ago: int = Field(0, ge=0, description="Days since the task was last touched")
    estimated_hours: Optional[float] = Field(None, ge=0, description="Estimated effort in hours")
    blocks: List[str] = Field(default_factory=list, description="Titles of tasks this task blocks")

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        if isinstance(value, TaskStatus):
            return value
        if isinstance(value, str):
            return TaskStatus.parse(value)
        return value

    @field_validator("blocks", mode="before")
    @classmethod
    def _none_blocks(cls, value: object) -> object:
        return [] if value is None else value

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "title": "Implement Payments API",
                "assigned_to": "Dev A",
                "status": "Blocked",
                "last_updated_days_ago": 6,
                "estimated_hours": 20,
                "blocks": ["Deploy to staging", "Stripe webhook handling"],
            }
        }


class GitCommit(BaseModel):
    """A single commit from a commit log export or a local repository."""

    model_config = ConfigDict(frozen=True)

    sha: str = Field("unknown", description="Commit SHA")
    author: str = Field("Unknown", description="Author name")
    date: datetime.date = Field(..., description="Calendar date the commit was authored")
    message: str = Field("", description="Commit message summary")


class ChatMessage(BaseModel):
    """A message from a team chat export."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Calendar date the message was sent")
    author: str = Field(..., description="Sender name")
    text: str = Field(..., description="Message text, continuation lines joined by newlines")


class BudgetItem(BaseModel):
    """A row of the budget sheet: hours and rate for a person or feature."""

    item: str = Field("", description="Line item label")
    budgeted_hours: float = Field(0, ge=0, description="Hours budgeted")
    spent_hours: float = Field(0, ge=0, description="Hours spent so far")
    cost_per_hour: float = Field(0, ge=0, description="Hourly rate")
    status: BudgetStatus = Field(BudgetStatus.ACTIVE, description="Line item status")

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        if isinstance(value, BudgetStatus):
            return value
        if value is None or isinstance(value, str):
            return BudgetStatus.parse(value)
        return value

    @property
    def budgeted_cost(self) -> float:
        return self.budgeted_hours * self.cost_per_hour

    @property
    def spent_cost(self) -> float:
        return self.spent_hours * self.cost_per_hour


class ProjectData(BaseModel):
    """Complete in-memory snapshot of a project, analysed in a single pass."""

    project_name: str = Field("Unnamed Project", description="Project name")
    release_date: str = Field("2025-12-31", description="Planned release date (YYYY-MM-DD)")
    initial_features: List[str] = Field(default_factory=list, description="Features in the original scope")
    current_features: List[str] = Field(default_factory=list, description="Features in the current scope")
    tasks: List[Task] = Field(default_factory=list, description="Tracked tasks")
    messages: List[str] = Field(default_factory=list, description="Plain status messages")
    commits: List[GitCommit] = Field(default_factory=list, description="Parsed commits")
    chat_messages: List[ChatMessage] = Field(default_factory=list, description="Parsed chat messages")
    budget_items: List[BudgetItem] = Field(default_factory=list, description="Parsed budget rows")

    @field_validator(
        "initial_features",
        "current_features",
        "tasks",
        "messages",
        "commits",
        "chat_messages",
        "budget_items",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    def added_features(self) -> List[str]:
        """Features present now that were not in the initial scope."""
        return added_features(self.initial_features, self.current_features)

    def source_count(self) -> int:
        """Number of optional data sources (commits, chat, budget) supplied."""
        return sum(bool(s) for s in (self.commits, self.chat_messages, self.budget_items))
