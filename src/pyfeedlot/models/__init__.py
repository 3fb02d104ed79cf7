"""Data models for persisted feedlot documents."""

from pyfeedlot.models._base import FeedlotBaseModel, UtcDatetime
from pyfeedlot.models.alert import Alert, AlertInput, AlertType, Toast, ToastLevel
from pyfeedlot.models.cattle import (
    OCCUPYING_STATUSES,
    Animal,
    CattleInput,
    CattleMove,
    CattleStatus,
    HistoryAction,
    HistoryEntry,
    StatusChange,
)
from pyfeedlot.models.goals import BeanStage, Goal, GoalState, GoalToggle, StageProgress
from pyfeedlot.models.lot import Lot, LotStats, OverallStats
from pyfeedlot.models.reports import (
    CapacityReport,
    CapacityRow,
    DaysOnFeedBucket,
    StatusReport,
    StatusRow,
)

__all__ = [
    "OCCUPYING_STATUSES",
    "Alert",
    "AlertInput",
    "AlertType",
    "Animal",
    "BeanStage",
    "CapacityReport",
    "CapacityRow",
    "CattleInput",
    "CattleMove",
    "CattleStatus",
    "DaysOnFeedBucket",
    "FeedlotBaseModel",
    "Goal",
    "GoalState",
    "GoalToggle",
    "HistoryAction",
    "HistoryEntry",
    "Lot",
    "LotStats",
    "OverallStats",
    "StageProgress",
    "StatusChange",
    "StatusReport",
    "StatusRow",
    "Toast",
    "ToastLevel",
    "UtcDatetime",
]
