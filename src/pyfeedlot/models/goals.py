"""Daily goal tracker models."""

from __future__ import annotations

from pydantic import Field

from pyfeedlot.models._base import FeedlotBaseModel


class Goal(FeedlotBaseModel):
    id: str
    icon: str
    text: str
    points: int


class BeanStage(FeedlotBaseModel):
    name: str
    css_class: str
    min_points: int
    icon: str


class GoalState(FeedlotBaseModel):
    """Persisted tracker state.

    ``daily_log`` maps ``YYYY-MM-DD`` day keys to the ids of the goals
    completed that day, in completion order.
    """

    name: str = ""
    total_points: int = 0
    daily_log: dict[str, list[str]] = Field(default_factory=dict)
    streak: int = 0
    last_completed_date: str | None = None


class StageProgress(FeedlotBaseModel):
    stage: BeanStage
    next_stage: BeanStage | None = None
    points_in_stage: int = 0
    points_needed: int = 0
    percent: float = 100.0

    @property
    def label(self) -> str:
        if self.next_stage is None:
            return "Max level reached! You're a Super Bean!"
        return f"{self.points_in_stage} / {self.points_needed} to {self.next_stage.name}"


class GoalToggle(FeedlotBaseModel):
    """Outcome of toggling one goal for today."""

    goal: Goal
    completed: bool
    total_points: int
    stage: BeanStage
    stage_up: bool = False
    all_complete: bool = False
