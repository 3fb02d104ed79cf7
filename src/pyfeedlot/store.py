"""Persistent feedlot store.

This is the only component allowed to read or write the durable lot,
cattle and alert documents.  Every operation is a full
read-modify-write of the affected collection against the storage
backend; nothing is cached in memory between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, date, datetime, timedelta
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from pyfeedlot._ids import generate_id
from pyfeedlot._normalize import as_datetime, coerce_date, safe_int, strip_str
from pyfeedlot.config import FeedlotConfig
from pyfeedlot.exceptions import FeedlotConfigError, LotCapacityError, StorageCorruptError, UnknownLotError
from pyfeedlot.models import (
    OCCUPYING_STATUSES,
    Alert,
    AlertInput,
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
)
from pyfeedlot.seed import DemoData, default_lots, generate_demo_data
from pyfeedlot.storage import JsonFileStorage, StorageBackend

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_LOTS = TypeAdapter(list[Lot])
_CATTLE = TypeAdapter(list[Animal])
_ALERTS = TypeAdapter(list[Alert])

_INITIALIZED_MARKER = "true"

# Fields that update_cattle refuses to touch; history is append-only.
_IMMUTABLE_FIELDS = frozenset({"id", "history"})


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _field_lookup() -> dict[str, str]:
    """Map both snake_case names and camelCase aliases to Animal field names."""
    lookup: dict[str, str] = {}
    for name, info in Animal.model_fields.items():
        lookup[name] = name
        if info.alias:
            lookup[info.alias] = name
    return lookup


_ANIMAL_FIELDS = _field_lookup()


def _count_stats(cattle: Iterable[Animal], capacity: int) -> LotStats:
    counts = {status: 0 for status in CattleStatus}
    occupied = 0
    for animal in cattle:
        counts[animal.status] += 1
        if animal.occupies_lot:
            occupied += 1
    return LotStats(
        total=occupied,
        available=capacity - occupied,
        active=counts[CattleStatus.ACTIVE],
        processing=counts[CattleStatus.PROCESSING],
        deceased=counts[CattleStatus.DECEASED],
        medical=counts[CattleStatus.MEDICAL],
        pregnant=counts[CattleStatus.PREGNANT],
    )


def _lot_label(lot_id: int) -> str:
    return f"Lot {lot_id}"


class FeedlotStore:
    """Durable store for lots, cattle and alerts.

    Parameters
    ----------
    storage : StorageBackend
        Key/value backend holding the four JSON documents.
    config : FeedlotConfig
        Lot layout, key prefix and capacity enforcement settings.
    clock : callable
        Returns the current aware datetime; injectable for tests.
    id_factory : callable
        Returns a fresh unique record id.
    """

    def __init__(
        self,
        storage: StorageBackend,
        *,
        config: FeedlotConfig | None = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._storage = storage
        self._config = config or FeedlotConfig()
        self._keys = self._config.keys
        self._clock = clock
        self._id_factory = id_factory

    @classmethod
    def open(cls, config: FeedlotConfig | None = None, **kwargs: Any) -> FeedlotStore:
        """Create a store backed by JSON files in ``config.data_dir``."""
        config = config or FeedlotConfig.from_env()
        if not config.data_dir:
            raise FeedlotConfigError("data_dir is required to open a file-backed store")
        return cls(JsonFileStorage(config.data_dir), config=config, **kwargs)

    @property
    def config(self) -> FeedlotConfig:
        return self._config

    @property
    def storage(self) -> StorageBackend:
        return self._storage

    def now(self) -> datetime:
        return self._clock()

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------

    def _load(self, key: str, adapter: TypeAdapter[list[T]]) -> list[T] | None:
        raw = self._storage.get_item(key)
        if raw is None:
            return None
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            raise StorageCorruptError(f"stored document {key!r} is invalid: {exc}", key=key) from exc

    def _save(self, key: str, adapter: TypeAdapter[list[T]], items: list[T]) -> None:
        payload = adapter.dump_json(items, by_alias=True).decode("utf-8")
        self._storage.set_item(key, payload)
        _logger.debug("Persisted %d records to %s", len(items), key)

    # ------------------------------------------------------------------
    # Lots
    # ------------------------------------------------------------------

    def get_lots(self) -> list[Lot]:
        """Persisted lots, or the default layout when none are stored yet."""
        lots = self._load(self._keys.lots, _LOTS)
        if lots is None:
            lots = default_lots(self._config.lot_count, self._config.lot_capacity)
        return sorted(lots, key=lambda lot: lot.id)

    def save_lots(self, lots: list[Lot]) -> None:
        self._save(self._keys.lots, _LOTS, sorted(lots, key=lambda lot: lot.id))

    def get_lot(self, lot_id: int) -> Lot | None:
        for lot in self.get_lots():
            if lot.id == lot_id:
                return lot
        return None

    def _capacity_for(self, lot_id: int) -> int:
        lot = self.get_lot(lot_id)
        return lot.capacity if lot is not None else self._config.lot_capacity

    def _ensure_room(self, lot_id: int, status: CattleStatus, cattle: list[Animal]) -> None:
        """Reject placing an occupying animal into a full or unknown lot."""
        lot = self.get_lot(lot_id)
        if lot is None:
            if self._config.enforce_capacity:
                raise UnknownLotError(f"Lot {lot_id} does not exist", lot_id=lot_id)
            _logger.warning("Placing animal in unknown lot %s", lot_id)
            return
        if status not in OCCUPYING_STATUSES:
            return
        stats = _count_stats((c for c in cattle if c.lot_id == lot_id), lot.capacity)
        if stats.available > 0:
            return
        if self._config.enforce_capacity:
            raise LotCapacityError(
                f"{lot.name} is FULL ({stats.total}/{lot.capacity})",
                lot_id=lot_id,
                capacity=lot.capacity,
                occupied=stats.total,
            )
        _logger.warning("%s is over capacity (%d/%d)", lot.name, stats.total + 1, lot.capacity)

    # ------------------------------------------------------------------
    # Cattle
    # ------------------------------------------------------------------

    def get_all_cattle(self) -> list[Animal]:
        """All cattle in insertion order."""
        return self._load(self._keys.cattle, _CATTLE) or []

    def _save_cattle(self, cattle: list[Animal]) -> None:
        self._save(self._keys.cattle, _CATTLE, cattle)

    def get_cattle_by_id(self, cattle_id: str) -> Animal | None:
        for animal in self.get_all_cattle():
            if animal.id == cattle_id:
                return animal
        return None

    def get_cattle_by_lot(self, lot_id: int) -> list[Animal]:
        return [c for c in self.get_all_cattle() if c.lot_id == lot_id]

    def get_active_cattle_by_lot(self, lot_id: int) -> list[Animal]:
        """Cattle in *lot_id* that occupy capacity (active, medical, pregnant)."""
        return [c for c in self.get_all_cattle() if c.lot_id == lot_id and c.occupies_lot]

    def add_cattle(self, data: CattleInput | Mapping[str, Any]) -> Animal:
        """Add a new animal and persist it.

        *data* may be a :class:`CattleInput` or a mapping of raw form
        values (snake_case or camelCase keys).  Raises
        :class:`LotCapacityError` when the target lot is full and
        capacity enforcement is on.
        """
        entry = data if isinstance(data, CattleInput) else CattleInput.model_validate(data)
        cattle = self.get_all_cattle()
        self._ensure_room(entry.lot_id, entry.status, cattle)

        now = self._clock()
        record = Animal(
            id=self._id_factory(),
            tag_number=entry.tag_number,
            lot_id=entry.lot_id,
            breed=entry.breed,
            weight=entry.weight,
            date_added=entry.date_added or now.date(),
            status=entry.status,
            status_date=now,
            notes=entry.notes,
            history=[
                HistoryEntry(
                    date=now,
                    action=HistoryAction.ADDED,
                    status=entry.status,
                    notes="Entered lot",
                )
            ],
        )
        cattle.append(record)
        self._save_cattle(cattle)
        _logger.debug("Added tag=%s to lot=%s id=%s", record.tag_number, record.lot_id, record.id)
        return record

    def _normalize_updates(self, updates: Mapping[str, Any]) -> dict[str, Any]:
        normalized: dict[str, Any] = {}
        for key, value in updates.items():
            name = _ANIMAL_FIELDS.get(key)
            if name is None:
                raise ValueError(f"unknown cattle field {key!r}")
            if name in _IMMUTABLE_FIELDS:
                raise ValueError(f"cattle field {key!r} cannot be updated")
            if name in ("tag_number", "breed", "notes"):
                value = strip_str(value)
            elif name == "lot_id":
                parsed = safe_int(value)
                if parsed is None:
                    raise ValueError(f"lot_id must be an integer, got {value!r}")
                value = parsed
            elif name == "weight":
                value = safe_int(value) or None
            elif name == "status":
                value = CattleStatus(value)
            elif name == "date_added":
                value = coerce_date(value)
                if isinstance(value, str):
                    value = date.fromisoformat(value)
            elif name == "status_date":
                value = as_datetime(value)
            normalized[name] = value
        return normalized

    def update_cattle(self, cattle_id: str, updates: Mapping[str, Any]) -> Animal | None:
        """Shallow-merge *updates* into an animal.

        Every effective change is recorded in the history: a status
        change as ``status_change``, a lot change as ``moved`` and any
        other fields as a single ``updated`` entry.  Returns ``None``
        when no animal has *cattle_id*, before *updates* are validated.
        """
        cattle = self.get_all_cattle()
        idx = next((i for i, c in enumerate(cattle) if c.id == cattle_id), None)
        if idx is None:
            return None

        normalized = self._normalize_updates(updates)
        current = cattle[idx]
        merged = current.model_dump()
        changed = [name for name, value in normalized.items() if merged[name] != value]
        if not changed:
            return current

        merged.update(normalized)
        now = self._clock()
        history = list(current.history)
        if "status" in changed:
            merged["status_date"] = now
            history.append(
                HistoryEntry(
                    date=now,
                    action=HistoryAction.STATUS_CHANGE,
                    from_=current.status.value,
                    to=merged["status"].value,
                    notes=merged["notes"] if "notes" in changed else "",
                )
            )
        if "lot_id" in changed:
            self._ensure_room(merged["lot_id"], merged["status"], [c for c in cattle if c.id != cattle_id])
            history.append(
                HistoryEntry(
                    date=now,
                    action=HistoryAction.MOVED,
                    from_=_lot_label(current.lot_id),
                    to=_lot_label(merged["lot_id"]),
                )
            )
        # status_date is overwritten by a status change, so only an explicit one is "updated".
        skipped = {"status", "lot_id", "status_date"} if "status" in changed else {"status", "lot_id"}
        other = [name for name in changed if name not in skipped]
        if other:
            history.append(
                HistoryEntry(
                    date=now,
                    action=HistoryAction.UPDATED,
                    notes="Updated: " + ", ".join(other),
                )
            )
        merged["history"] = history

        updated = Animal.model_validate(merged)
        cattle[idx] = updated
        self._save_cattle(cattle)
        _logger.debug("Updated id=%s fields=%s", cattle_id, changed)
        return updated

    def change_status(
        self,
        cattle_id: str,
        new_status: CattleStatus | str,
        notes: str = "",
    ) -> StatusChange | None:
        """Set an animal's status and record the transition.

        Any status may follow any other.  Non-empty *notes* replace the
        animal's notes.  Returns ``None`` for an unknown *cattle_id*.
        """
        status = CattleStatus(new_status)
        notes = strip_str(notes)
        cattle = self.get_all_cattle()
        idx = next((i for i, c in enumerate(cattle) if c.id == cattle_id), None)
        if idx is None:
            return None

        current = cattle[idx]
        now = self._clock()
        entry = HistoryEntry(
            date=now,
            action=HistoryAction.STATUS_CHANGE,
            from_=current.status.value,
            to=status.value,
            notes=notes,
        )
        changes: dict[str, Any] = {
            "status": status,
            "status_date": now,
            "history": [*current.history, entry],
        }
        if notes:
            changes["notes"] = notes
        updated = current.model_copy(update=changes)
        cattle[idx] = updated
        self._save_cattle(cattle)
        _logger.debug("Status id=%s %s -> %s", cattle_id, current.status, status)
        return StatusChange(animal=updated, old_status=current.status, new_status=status)

    def move_cattle(self, cattle_id: str, new_lot_id: int | str) -> CattleMove | None:
        """Move an animal to another lot, leaving status and weight alone.

        Raises :class:`LotCapacityError` when the target lot is full and
        capacity enforcement is on.  Returns ``None`` for an unknown
        *cattle_id*.
        """
        lot_id = safe_int(new_lot_id)
        if lot_id is None:
            raise ValueError(f"lot id must be an integer, got {new_lot_id!r}")
        cattle = self.get_all_cattle()
        idx = next((i for i, c in enumerate(cattle) if c.id == cattle_id), None)
        if idx is None:
            return None

        current = cattle[idx]
        if lot_id != current.lot_id:
            self._ensure_room(lot_id, current.status, cattle)

        entry = HistoryEntry(
            date=self._clock(),
            action=HistoryAction.MOVED,
            from_=_lot_label(current.lot_id),
            to=_lot_label(lot_id),
        )
        updated = current.model_copy(update={"lot_id": lot_id, "history": [*current.history, entry]})
        cattle[idx] = updated
        self._save_cattle(cattle)
        _logger.debug("Moved id=%s lot %s -> %s", cattle_id, current.lot_id, lot_id)
        return CattleMove(animal=updated, old_lot_id=current.lot_id, new_lot_id=lot_id)

    def delete_cattle(self, cattle_id: str) -> bool:
        """Remove an animal.  Returns ``False`` when it did not exist."""
        cattle = self.get_all_cattle()
        remaining = [c for c in cattle if c.id != cattle_id]
        self._save_cattle(remaining)
        return len(remaining) != len(cattle)

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def get_alerts(self) -> list[Alert]:
        """All alerts, newest first."""
        return self._load(self._keys.alerts, _ALERTS) or []

    def _save_alerts(self, alerts: list[Alert]) -> None:
        self._save(self._keys.alerts, _ALERTS, alerts)

    def add_alert(self, data: AlertInput | Mapping[str, Any]) -> Alert:
        entry = data if isinstance(data, AlertInput) else AlertInput.model_validate(data)
        alerts = self.get_alerts()
        record = Alert(
            id=self._id_factory(),
            type=entry.type,
            lot_id=entry.lot_id or None,
            cattle_id=entry.cattle_id or None,
            tag_number=entry.tag_number,
            message=entry.message,
            timestamp=self._clock(),
            read=False,
        )
        alerts.insert(0, record)
        self._save_alerts(alerts)
        _logger.debug("Alert type=%s lot=%s: %s", record.type, record.lot_id, record.message)
        return record

    def mark_alert_read(self, alert_id: str) -> bool:
        """Mark one alert read.  Returns ``False`` when it does not exist."""
        alerts = self.get_alerts()
        for i, alert in enumerate(alerts):
            if alert.id == alert_id:
                alerts[i] = alert.model_copy(update={"read": True})
                self._save_alerts(alerts)
                return True
        return False

    def mark_all_alerts_read(self) -> None:
        alerts = [alert.model_copy(update={"read": True}) for alert in self.get_alerts()]
        self._save_alerts(alerts)

    def clear_alerts(self) -> None:
        self._save_alerts([])

    def get_unread_count(self) -> int:
        return sum(1 for alert in self.get_alerts() if not alert.read)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_lot_stats(self, lot_id: int) -> LotStats:
        """Head counts for one lot; ``available`` is not clamped at zero."""
        return _count_stats(self.get_cattle_by_lot(lot_id), self._capacity_for(lot_id))

    def get_overall_stats(self) -> OverallStats:
        cattle = self.get_all_cattle()
        total_capacity = sum(lot.capacity for lot in self.get_lots())
        stats = _count_stats(cattle, total_capacity)
        return OverallStats(
            total_capacity=total_capacity,
            total_occupied=stats.total,
            total_available=stats.available,
            active=stats.active,
            processing=stats.processing,
            deceased=stats.deceased,
            medical=stats.medical,
            pregnant=stats.pregnant,
            total_cattle=len(cattle),
        )

    def get_days_on_feed(self, date_added: date | datetime | str) -> int:
        """Whole days elapsed since *date_added*, rounded down.

        Plain dates count from midnight UTC, so an animal added today
        is on day 0 for its first 24 hours.
        """
        return (self._clock() - as_datetime(date_added)) // timedelta(days=1)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def is_initialized(self) -> bool:
        return self._storage.get_item(self._keys.initialized) == _INITIALIZED_MARKER

    def mark_initialized(self) -> None:
        self._storage.set_item(self._keys.initialized, _INITIALIZED_MARKER)

    def seed_demo_data(self, seed: int | None = None) -> DemoData:
        """Replace lots, cattle and alerts with a demo population."""
        demo = generate_demo_data(
            lot_count=self._config.lot_count,
            lot_capacity=self._config.lot_capacity,
            now=self._clock(),
            seed=seed,
            id_factory=self._id_factory,
        )
        self.save_lots(demo.lots)
        self._save_cattle(demo.cattle)
        self._save_alerts(demo.alerts)
        self.mark_initialized()
        _logger.debug("Seeded %d lots, %d cattle, %d alerts", len(demo.lots), len(demo.cattle), len(demo.alerts))
        return demo

    def ensure_initialized(self, seed: int | None = None) -> bool:
        """Seed demo data on first use.  Returns ``True`` if seeding ran."""
        if self.is_initialized():
            return False
        self.seed_demo_data(seed=seed)
        return True

    def reset_all(self) -> None:
        """Remove all four persisted documents."""
        for key in self._keys.all():
            self._storage.remove_item(key)
        _logger.debug("Reset store keys=%s", self._keys.all())
