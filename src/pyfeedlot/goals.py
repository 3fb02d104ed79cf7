"""Daily goal tracker ("Lil Beans").

Completing a daily goal earns growing points; points move the bean
through its growth stages and finishing every goal on consecutive days
builds a streak.  State is one JSON document under ``lilbeans_data``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

from pydantic import ValidationError

from pyfeedlot._constants import GOALS_STORAGE_KEY
from pyfeedlot.exceptions import StorageCorruptError
from pyfeedlot.models import BeanStage, Goal, GoalState, GoalToggle, StageProgress
from pyfeedlot.storage import StorageBackend

_logger = logging.getLogger(__name__)

DAILY_GOALS: tuple[Goal, ...] = (
    Goal(id="eat-healthy", icon="\U0001f966", text="Eat something healthy", points=2),
    Goal(id="workout", icon="\U0001f3c3", text="Get moving & exercise", points=2),
    Goal(id="be-nice", icon="\U0001f31f", text="Be nice to someone", points=2),
    Goal(id="help-someone", icon="\U0001f91d", text="Help someone today", points=2),
    Goal(id="give-hug", icon="\U0001f917", text="Give a hug", points=2),
)

BEAN_STAGES: tuple[BeanStage, ...] = (
    BeanStage(name="Lil Seed", css_class="seed", min_points=0, icon="\U0001fab4"),
    BeanStage(name="Sprout", css_class="sprout", min_points=10, icon="\U0001f331"),
    BeanStage(name="Lil Bean", css_class="lil-bean", min_points=25, icon="\U0001f33f"),
    BeanStage(name="Growing Bean", css_class="growing-bean", min_points=50, icon="\U0001f343"),
    BeanStage(name="Big Bean", css_class="big-bean", min_points=100, icon="\U0001f333"),
    BeanStage(name="Super Bean", css_class="super-bean", min_points=200, icon="⭐"),
)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def day_key(day: date) -> str:
    return day.isoformat()


def stage_for_points(points: int) -> BeanStage:
    """Highest stage whose threshold *points* has reached."""
    for stage in reversed(BEAN_STAGES):
        if points >= stage.min_points:
            return stage
    return BEAN_STAGES[0]


def next_stage(stage: BeanStage) -> BeanStage | None:
    idx = BEAN_STAGES.index(stage)
    if idx < len(BEAN_STAGES) - 1:
        return BEAN_STAGES[idx + 1]
    return None


def _goal(goal_id: str) -> Goal:
    for goal in DAILY_GOALS:
        if goal.id == goal_id:
            return goal
    raise ValueError(f"unknown goal {goal_id!r}")


class GoalTracker:
    """Persistent daily goal tracker.

    Saved state is loaded on construction and re-read before every
    write, so trackers sharing a storage backend never clobber each
    other's progress.  Storage errors propagate as
    :class:`~pyfeedlot.exceptions.StorageUnavailableError` rather than
    being dropped, so a failed save is never mistaken for a saved one.
    """

    def __init__(
        self,
        storage: StorageBackend,
        *,
        clock: Callable[[], datetime] = _local_now,
        key: str = GOALS_STORAGE_KEY,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._key = key
        self._state = GoalState()
        self.load()

    @property
    def state(self) -> GoalState:
        return self._state

    def _today(self) -> str:
        return day_key(self._clock().date())

    def _save(self) -> None:
        self._storage.set_item(self._key, self._state.model_dump_json(by_alias=True))

    def load(self) -> bool:
        """Load saved state.  Returns ``False`` when nothing was saved yet."""
        raw = self._storage.get_item(self._key)
        if raw is None:
            self._state = GoalState()
            return False
        try:
            self._state = GoalState.model_validate_json(raw)
        except ValidationError as exc:
            raise StorageCorruptError(f"stored document {self._key!r} is invalid: {exc}", key=self._key) from exc
        return True

    def start(self, name: str) -> GoalState:
        name = name.strip()
        if not name:
            raise ValueError("name must be non-empty")
        self.load()
        self._state = self._state.model_copy(update={"name": name})
        self._save()
        return self._state

    def completed_today(self) -> list[str]:
        return list(self._state.daily_log.get(self._today(), []))

    def toggle_goal(self, goal_id: str) -> GoalToggle:
        """Complete an open goal for today, or undo a completed one.

        Undoing subtracts the goal's points again, never below zero.
        """
        goal = _goal(goal_id)
        self.load()
        today = self._today()
        completed = self.completed_today()
        previous = stage_for_points(self._state.total_points)

        if goal.id in completed:
            completed.remove(goal.id)
            points = max(0, self._state.total_points - goal.points)
            done = False
        else:
            completed.append(goal.id)
            points = self._state.total_points + goal.points
            done = True

        all_complete = len(completed) == len(DAILY_GOALS)
        daily_log = {**self._state.daily_log, today: completed}
        updates: dict[str, object] = {"total_points": points, "daily_log": daily_log}
        if done and all_complete:
            updates["last_completed_date"] = today
        self._state = self._state.model_copy(update=updates)
        self._state = self._state.model_copy(update={"streak": self.calculate_streak()})
        self._save()

        stage = stage_for_points(points)
        _logger.debug("Goal %s %s; points=%d", goal.id, "completed" if done else "undone", points)
        return GoalToggle(
            goal=goal,
            completed=done,
            total_points=points,
            stage=stage,
            stage_up=BEAN_STAGES.index(stage) > BEAN_STAGES.index(previous),
            all_complete=done and all_complete,
        )

    def calculate_streak(self) -> int:
        """Consecutive fully completed days ending today.

        If today is not finished yet the streak counts back from
        yesterday, so an unfinished today does not break it.
        """
        log = self._state.daily_log
        if not log:
            return 0
        goal_count = len(DAILY_GOALS)
        day = self._clock().date()
        if len(log.get(day_key(day), [])) != goal_count:
            day -= timedelta(days=1)

        streak = 0
        while len(log.get(day_key(day), [])) == goal_count:
            streak += 1
            day -= timedelta(days=1)
        return streak

    def progress(self) -> StageProgress:
        points = self._state.total_points
        stage = stage_for_points(points)
        upcoming = next_stage(stage)
        if upcoming is None:
            return StageProgress(stage=stage)
        in_stage = points - stage.min_points
        needed = upcoming.min_points - stage.min_points
        return StageProgress(
            stage=stage,
            next_stage=upcoming,
            points_in_stage=in_stage,
            points_needed=needed,
            percent=min(in_stage / needed * 100, 100.0),
        )

    def daily_summary(self) -> str | None:
        """Congratulation line once every goal is done today, else ``None``."""
        if len(self.completed_today()) != len(DAILY_GOALS):
            return None
        earned = sum(goal.points for goal in DAILY_GOALS)
        return f"You completed all {len(DAILY_GOALS)} goals and earned {earned} growing points today!"

    def reset(self) -> None:
        self._storage.remove_item(self._key)
        self._state = GoalState()
