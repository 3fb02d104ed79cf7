"""Alert generation and toast notifications.

The notifier turns store mutations into persisted :class:`Alert`
records and short-lived :class:`Toast` notifications, and keeps the
unread badge in sync.  Toasts never touch durable storage.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator, Mapping
from datetime import UTC, date, datetime, timedelta
from typing import Any

from pyfeedlot._constants import (
    ALERT_ICONS,
    BADGE_MAX_COUNT,
    CAPACITY_FULL_PERCENT,
    CAPACITY_WARN_PERCENT,
    DEFAULT_ALERT_ICON,
)
from pyfeedlot._normalize import as_datetime
from pyfeedlot.exceptions import LotCapacityError
from pyfeedlot.models import (
    Alert,
    AlertInput,
    AlertType,
    Animal,
    CattleInput,
    CattleMove,
    CattleStatus,
    StatusChange,
    Toast,
    ToastLevel,
)
from pyfeedlot.store import FeedlotStore

_logger = logging.getLogger(__name__)

ToastSink = Callable[[Toast], None]
BadgeSink = Callable[[str | None], None]

# new status -> (alert type, message template)
_STATUS_ALERTS: dict[str, tuple[AlertType, str]] = {
    CattleStatus.PROCESSING: (
        AlertType.PROCESSING,
        "ALERT: Tag #{tag} moved to PROCESSING from {lot}. Was {old}.",
    ),
    CattleStatus.DECEASED: (
        AlertType.DEATH,
        "ALERT: Tag #{tag} reported DECEASED in {lot}. Was {old}.",
    ),
    CattleStatus.MEDICAL: (
        AlertType.MEDICAL,
        "Tag #{tag} placed in MEDICAL CARE in {lot}.",
    ),
    CattleStatus.PREGNANT: (
        AlertType.PREGNANCY,
        "Pregnancy confirmed for Tag #{tag} in {lot}.",
    ),
    CattleStatus.ACTIVE: (
        AlertType.MOVE,
        "Tag #{tag} returned to ACTIVE status in {lot}. Was {old}.",
    ),
}
_DEFAULT_STATUS_ALERT = (AlertType.MOVE, "Tag #{tag} status changed to {new} in {lot}.")

_TOAST_LEVELS: dict[str, ToastLevel] = {
    AlertType.DEATH: ToastLevel.DANGER,
    ToastLevel.DANGER: ToastLevel.DANGER,
    AlertType.PROCESSING: ToastLevel.WARNING,
    AlertType.CAPACITY: ToastLevel.WARNING,
    ToastLevel.WARNING: ToastLevel.WARNING,
}


def get_icon(alert_type: AlertType | str) -> str:
    """Glyph for an alert type, with a bell for anything unmapped."""
    return ALERT_ICONS.get(str(alert_type), DEFAULT_ALERT_ICON)


def toast_level(kind: AlertType | ToastLevel | str) -> ToastLevel:
    return _TOAST_LEVELS.get(str(kind), ToastLevel.INFO)


def badge_text(unread: int) -> str | None:
    """Badge label for *unread* alerts; ``None`` hides the badge."""
    if unread <= 0:
        return None
    if unread > BADGE_MAX_COUNT:
        return f"{BADGE_MAX_COUNT}+"
    return str(unread)


def format_time(timestamp: datetime | date | str, now: datetime | None = None) -> str:
    """Relative time label for an alert timestamp.

    Under a minute is "Just now", then minutes, hours and days up to a
    week; anything older is shown as an absolute ``M/D/YYYY`` date.
    *now* defaults to the current UTC time.
    """
    if now is None:
        now = datetime.now(UTC)
    moment = as_datetime(timestamp)
    diff = now - moment
    minutes = diff // timedelta(minutes=1)
    hours = diff // timedelta(hours=1)
    days = diff // timedelta(days=1)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return f"{moment.month}/{moment.day}/{moment.year}"


def _round_percent(value: float) -> int:
    return math.floor(value + 0.5)


class ToastQueue:
    """Collects toasts for callers without a UI; expired toasts drop out."""

    def __init__(self) -> None:
        self._toasts: list[Toast] = []

    def __call__(self, toast: Toast) -> None:
        self._toasts.append(toast)

    def __iter__(self) -> Iterator[Toast]:
        return iter(list(self._toasts))

    def __len__(self) -> int:
        return len(self._toasts)

    def active(self, now: datetime) -> list[Toast]:
        """Prune expired toasts and return the rest, oldest first."""
        self._toasts = [t for t in self._toasts if not t.is_expired(now)]
        return list(self._toasts)

    def dismiss(self, toast: Toast) -> None:
        if toast in self._toasts:
            self._toasts.remove(toast)

    def clear(self) -> None:
        self._toasts.clear()


class AlertNotifier:
    """Derive alerts from store transitions and surface them as toasts.

    Parameters
    ----------
    store : FeedlotStore
        Store the alerts are persisted through.
    toast_sink : callable, optional
        Receives each :class:`Toast`.  Defaults to an in-memory
        :class:`ToastQueue` exposed as :attr:`toasts`.
    badge_sink : callable, optional
        Receives the badge label (``None`` when hidden) on every refresh.
    """

    def __init__(
        self,
        store: FeedlotStore,
        *,
        toast_sink: ToastSink | None = None,
        badge_sink: BadgeSink | None = None,
    ) -> None:
        self._store = store
        self.toasts = ToastQueue()
        self._toast_sink: ToastSink = toast_sink if toast_sink is not None else self.toasts
        self._badge_sink = badge_sink
        self._badge: str | None = None

    @property
    def store(self) -> FeedlotStore:
        return self._store

    @property
    def badge(self) -> str | None:
        """Badge label from the last refresh."""
        return self._badge

    # ------------------------------------------------------------------
    # Alert derivation
    # ------------------------------------------------------------------

    def on_status_change(
        self,
        animal: Animal,
        old_status: CattleStatus | str,
        new_status: CattleStatus | str,
    ) -> Alert:
        alert_type, template = _STATUS_ALERTS.get(str(new_status), _DEFAULT_STATUS_ALERT)
        message = template.format(
            tag=animal.tag_number,
            lot=f"Lot {animal.lot_id}",
            old=str(old_status),
            new=str(new_status),
        )
        alert = self._store.add_alert(
            AlertInput(
                type=alert_type,
                lot_id=animal.lot_id,
                cattle_id=animal.id,
                tag_number=animal.tag_number,
                message=message,
            )
        )
        self.show_toast(message, alert_type)
        self.update_badge()
        return alert

    def on_cattle_moved(self, animal: Animal, old_lot_id: int, new_lot_id: int) -> Alert:
        message = f"Tag #{animal.tag_number} moved from Lot {old_lot_id} to Lot {new_lot_id}."
        alert = self._store.add_alert(
            AlertInput(
                type=AlertType.MOVE,
                lot_id=new_lot_id,
                cattle_id=animal.id,
                tag_number=animal.tag_number,
                message=message,
            )
        )
        self.show_toast(message, ToastLevel.INFO)
        self.update_badge()
        return alert

    def check_capacity(self, lot_id: int) -> Alert | None:
        """Raise a capacity alert when a lot is at least 85% occupied.

        At 95% and above the alert says the lot is nearly full and a
        warning toast is shown as well.
        """
        stats = self._store.get_lot_stats(lot_id)
        lot = self._store.get_lot(lot_id)
        capacity = lot.capacity if lot is not None else self._store.config.lot_capacity
        if capacity <= 0:
            return None
        pct = stats.total * 100 / capacity
        if pct < CAPACITY_WARN_PERCENT:
            return None

        message = f"Lot {lot_id} is at {_round_percent(pct)}% capacity ({stats.total}/{capacity})."
        nearly_full = pct >= CAPACITY_FULL_PERCENT
        if nearly_full:
            message += " Nearly FULL!"
        alert = self._store.add_alert(AlertInput(type=AlertType.CAPACITY, lot_id=lot_id, message=message))
        if nearly_full:
            self.show_toast(message, AlertType.CAPACITY)
        self.update_badge()
        return alert

    # ------------------------------------------------------------------
    # Toasts and badge
    # ------------------------------------------------------------------

    def show_toast(self, message: str, kind: AlertType | ToastLevel | str = ToastLevel.INFO) -> Toast:
        now = self._store.now()
        toast = Toast(
            message=message,
            level=toast_level(kind),
            icon=get_icon(kind),
            created_at=now,
            expires_at=now + timedelta(seconds=self._store.config.toast_duration),
        )
        self._toast_sink(toast)
        return toast

    def update_badge(self) -> str | None:
        self._badge = badge_text(self._store.get_unread_count())
        if self._badge_sink is not None:
            self._badge_sink(self._badge)
        return self._badge

    def format_time(self, timestamp: datetime | date | str) -> str:
        return format_time(timestamp, self._store.now())

    # ------------------------------------------------------------------
    # Store operations with follow-up notifications
    # ------------------------------------------------------------------

    def add_cattle(self, data: CattleInput | Mapping[str, Any]) -> Animal:
        """Add an animal, alerting on a non-active intake and on lot capacity."""
        entry = data if isinstance(data, CattleInput) else CattleInput.model_validate(data)
        try:
            animal = self._store.add_cattle(entry)
        except LotCapacityError as exc:
            self.show_toast(f"Lot {exc.lot_id} is FULL. Cannot add cattle.", AlertType.DEATH)
            raise
        if animal.status != CattleStatus.ACTIVE:
            self.on_status_change(animal, "new", animal.status)
        self.check_capacity(animal.lot_id)
        return animal

    def update_cattle(self, cattle_id: str, updates: Mapping[str, Any]) -> Animal | None:
        before = self._store.get_cattle_by_id(cattle_id)
        if before is None:
            return None
        try:
            animal = self._store.update_cattle(cattle_id, updates)
        except LotCapacityError as exc:
            self.show_toast(f"Lot {exc.lot_id} is FULL. Cannot move cattle.", AlertType.DEATH)
            raise
        if animal is None:
            return None
        if animal.status != before.status:
            self.on_status_change(animal, before.status, animal.status)
        if animal.lot_id != before.lot_id:
            self.on_cattle_moved(animal, before.lot_id, animal.lot_id)
            self.check_capacity(animal.lot_id)
        return animal

    def change_status(
        self,
        cattle_id: str,
        new_status: CattleStatus | str,
        notes: str = "",
    ) -> StatusChange | None:
        result = self._store.change_status(cattle_id, new_status, notes)
        if result is not None:
            self.on_status_change(result.animal, result.old_status, result.new_status)
            self.check_capacity(result.animal.lot_id)
        return result

    def move_cattle(self, cattle_id: str, new_lot_id: int | str) -> CattleMove | None:
        try:
            result = self._store.move_cattle(cattle_id, new_lot_id)
        except LotCapacityError as exc:
            self.show_toast(f"Lot {exc.lot_id} is FULL. Cannot move cattle.", AlertType.DEATH)
            raise
        if result is not None:
            self.on_cattle_moved(result.animal, result.old_lot_id, result.new_lot_id)
            self.check_capacity(result.new_lot_id)
        return result

    def mark_alert_read(self, alert_id: str) -> bool:
        found = self._store.mark_alert_read(alert_id)
        self.update_badge()
        return found

    def mark_all_alerts_read(self) -> None:
        self._store.mark_all_alerts_read()
        self.update_badge()

    def clear_alerts(self) -> None:
        self._store.clear_alerts()
        self.update_badge()
        _logger.debug("Cleared all alerts")
