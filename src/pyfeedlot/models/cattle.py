"""Cattle record models."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator

from pyfeedlot._normalize import coerce_date, safe_int, strip_str
from pyfeedlot.models._base import FeedlotBaseModel, UtcDatetime


class CattleStatus(StrEnum):
    ACTIVE = "active"
    PROCESSING = "processing"
    DECEASED = "deceased"
    MEDICAL = "medical"
    PREGNANT = "pregnant"


#: Statuses that count against a lot's capacity.
OCCUPYING_STATUSES: frozenset[CattleStatus] = frozenset(
    {CattleStatus.ACTIVE, CattleStatus.MEDICAL, CattleStatus.PREGNANT}
)


class HistoryAction(StrEnum):
    ADDED = "added"
    STATUS_CHANGE = "status_change"
    MOVED = "moved"
    UPDATED = "updated"


class HistoryEntry(FeedlotBaseModel):
    """Append-only audit record attached to an animal.

    Which optional fields are set depends on ``action``:

    * ``added``: ``status`` and ``notes``
    * ``status_change``: ``from_``/``to`` statuses and ``notes``
    * ``moved``: ``from_``/``to`` as ``"Lot <id>"`` labels
    * ``updated``: ``notes`` naming the changed fields
    """

    date: UtcDatetime
    action: HistoryAction
    status: CattleStatus | None = None
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    notes: str = ""


class Animal(FeedlotBaseModel):
    """One tracked head of cattle.

    ``lot_id`` is a plain reference to a :class:`~pyfeedlot.models.lot.Lot`;
    resolve it through the store rather than embedding the lot.
    """

    id: str
    tag_number: str
    lot_id: int
    breed: str = ""
    weight: int | None = None
    date_added: date
    status: CattleStatus = CattleStatus.ACTIVE
    status_date: UtcDatetime
    notes: str = ""
    history: list[HistoryEntry] = Field(default_factory=list)

    @property
    def occupies_lot(self) -> bool:
        """Whether this animal counts against its lot's capacity."""
        return self.status in OCCUPYING_STATUSES

    @field_validator("date_added", mode="before")
    @classmethod
    def _coerce_date_added(cls, value: Any) -> Any:
        return coerce_date(value)


class CattleInput(FeedlotBaseModel):
    """Caller-supplied fields for a new animal.

    Mirrors a submitted "add cattle" form: strings are stripped and the
    numeric fields accept either numbers or numeric strings.
    """

    tag_number: str
    lot_id: int
    breed: str = ""
    weight: int | None = None
    date_added: date | None = None
    status: CattleStatus = CattleStatus.ACTIVE
    notes: str = ""

    @field_validator("tag_number", mode="before")
    @classmethod
    def _require_tag(cls, value: Any) -> str:
        tag = strip_str(value)
        if not tag:
            raise ValueError("tag_number must be non-empty")
        return tag

    @field_validator("breed", "notes", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> str:
        return strip_str(value)

    @field_validator("lot_id", mode="before")
    @classmethod
    def _parse_lot_id(cls, value: Any) -> Any:
        parsed = safe_int(value)
        return value if parsed is None else parsed

    @field_validator("weight", mode="before")
    @classmethod
    def _parse_weight(cls, value: Any) -> int | None:
        return safe_int(value) or None

    @field_validator("date_added", mode="before")
    @classmethod
    def _coerce_date_added(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return coerce_date(value)

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        if value is None or value == "":
            return CattleStatus.ACTIVE
        return value


class StatusChange(FeedlotBaseModel):
    """Result of :meth:`FeedlotStore.change_status`."""

    animal: Animal
    old_status: CattleStatus
    new_status: CattleStatus


class CattleMove(FeedlotBaseModel):
    """Result of :meth:`FeedlotStore.move_cattle`."""

    animal: Animal
    old_lot_id: int
    new_lot_id: int
