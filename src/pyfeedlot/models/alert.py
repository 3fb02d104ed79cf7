"""Alert and toast notification models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pyfeedlot.models._base import FeedlotBaseModel, UtcDatetime


class AlertType(StrEnum):
    PROCESSING = "processing"
    DEATH = "death"
    MEDICAL = "medical"
    PREGNANCY = "pregnancy"
    CAPACITY = "capacity"
    MOVE = "move"


class Alert(FeedlotBaseModel):
    """A persisted notification describing a state-changing event.

    ``lot_id`` and ``cattle_id`` are references, not owned copies; an
    alert may outlive the animal it mentions.
    """

    id: str
    type: AlertType
    lot_id: int | None = None
    cattle_id: str | None = None
    tag_number: str = ""
    message: str
    timestamp: UtcDatetime
    read: bool = False


class AlertInput(FeedlotBaseModel):
    """Fields supplied by the caller of :meth:`FeedlotStore.add_alert`."""

    type: AlertType
    message: str
    lot_id: int | None = None
    cattle_id: str | None = None
    tag_number: str = ""


class ToastLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class Toast(FeedlotBaseModel):
    """Ephemeral notification surfaced alongside an alert.

    Toasts are never persisted; they expire ``expires_at``.
    """

    message: str
    level: ToastLevel
    icon: str
    created_at: UtcDatetime
    expires_at: UtcDatetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
