"""Lot and lot statistics models."""

from __future__ import annotations

from pydantic import Field

from pyfeedlot.models._base import FeedlotBaseModel


class Lot(FeedlotBaseModel):
    """A fixed-capacity holding pen."""

    id: int = Field(ge=1)
    name: str
    capacity: int = Field(ge=0)


class LotStats(FeedlotBaseModel):
    """Head counts for a single lot.

    ``total`` and ``available`` only consider occupying statuses
    (active, medical, pregnant).  ``available`` is ``capacity - total``
    and goes negative when a lot is over-allocated.
    """

    total: int = 0
    available: int = 0
    active: int = 0
    processing: int = 0
    deceased: int = 0
    medical: int = 0
    pregnant: int = 0

    @property
    def is_over_capacity(self) -> bool:
        return self.available < 0


class OverallStats(FeedlotBaseModel):
    """Head counts aggregated across every lot."""

    total_capacity: int = 0
    total_occupied: int = 0
    total_available: int = 0
    active: int = 0
    processing: int = 0
    deceased: int = 0
    medical: int = 0
    pregnant: int = 0
    total_cattle: int = 0
