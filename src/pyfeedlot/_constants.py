"""Internal constants shared across the library."""

DEFAULT_KEY_PREFIX = "cflm"
LOTS_KEY_SUFFIX = "lots"
CATTLE_KEY_SUFFIX = "cattle"
ALERTS_KEY_SUFFIX = "alerts"
INITIALIZED_KEY_SUFFIX = "initialized"

GOALS_STORAGE_KEY = "lilbeans_data"

DEFAULT_LOT_COUNT = 10
DEFAULT_LOT_CAPACITY = 500

# ------------------------------------------------------------------
# Capacity alert thresholds  (percent of lot capacity)
# ------------------------------------------------------------------

CAPACITY_WARN_PERCENT = 85.0
CAPACITY_FULL_PERCENT = 95.0

# ------------------------------------------------------------------
# Toasts / badge
# ------------------------------------------------------------------

DEFAULT_TOAST_DURATION_SECONDS = 6.0
BADGE_MAX_COUNT = 99

# Glyphs shown next to alerts, keyed by alert type value.
ALERT_ICONS: dict[str, str] = {
    "processing": "⚠️",
    "death": "❌",
    "medical": "\U0001f48a",
    "pregnancy": "\U0001f495",
    "capacity": "\U0001f4e6",
    "move": "\U0001f69a",
}
DEFAULT_ALERT_ICON = "\U0001f514"

# ------------------------------------------------------------------
# Days-on-feed report buckets  (label, inclusive upper bound)
# ------------------------------------------------------------------

DAYS_ON_FEED_BUCKETS: tuple[tuple[str, int | None], ...] = (
    ("0-30 days", 30),
    ("31-60 days", 60),
    ("61-90 days", 90),
    ("91-120 days", 120),
    ("121-150 days", 150),
    ("151-180 days", 180),
    ("180+ days", None),
)
