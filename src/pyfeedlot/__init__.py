"""pyfeedlot - Local persistent store for feedlot cattle inventory."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfeedlot")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfeedlot.alerts import AlertNotifier, ToastQueue, format_time, get_icon
from pyfeedlot.config import FeedlotConfig
from pyfeedlot.exceptions import (
    FeedlotConfigError,
    FeedlotError,
    FeedlotStoreError,
    LotCapacityError,
    StorageCorruptError,
    StorageError,
    StorageUnavailableError,
    UnknownLotError,
)
from pyfeedlot.goals import GoalTracker
from pyfeedlot.models import (
    Alert,
    AlertType,
    Animal,
    CattleInput,
    CattleMove,
    CattleStatus,
    HistoryAction,
    HistoryEntry,
    Lot,
    LotStats,
    OverallStats,
    StatusChange,
    Toast,
    ToastLevel,
)
from pyfeedlot.storage import JsonFileStorage, MemoryStorage, StorageBackend
from pyfeedlot.store import FeedlotStore

__all__ = [
    "__version__",
    "Alert",
    "AlertNotifier",
    "AlertType",
    "Animal",
    "CattleInput",
    "CattleMove",
    "CattleStatus",
    "FeedlotConfig",
    "FeedlotConfigError",
    "FeedlotError",
    "FeedlotStore",
    "FeedlotStoreError",
    "GoalTracker",
    "HistoryAction",
    "HistoryEntry",
    "JsonFileStorage",
    "Lot",
    "LotCapacityError",
    "LotStats",
    "MemoryStorage",
    "OverallStats",
    "StatusChange",
    "StorageBackend",
    "StorageCorruptError",
    "StorageError",
    "StorageUnavailableError",
    "Toast",
    "ToastLevel",
    "ToastQueue",
    "UnknownLotError",
    "format_time",
    "get_icon",
]
