"""Report models derived from store contents."""

from __future__ import annotations

from pydantic import Field

from pyfeedlot.models._base import FeedlotBaseModel


class CapacityRow(FeedlotBaseModel):
    name: str
    capacity: int
    occupied: int
    available: int
    percent_full: float
    """Occupancy percent rounded to one decimal."""


class CapacityReport(FeedlotBaseModel):
    rows: list[CapacityRow] = Field(default_factory=list)
    total: CapacityRow


class StatusRow(FeedlotBaseModel):
    name: str
    active: int = 0
    medical: int = 0
    pregnant: int = 0
    processing: int = 0
    deceased: int = 0


class StatusReport(FeedlotBaseModel):
    rows: list[StatusRow] = Field(default_factory=list)
    total: StatusRow


class DaysOnFeedBucket(FeedlotBaseModel):
    label: str
    count: int
    percent: float
    """Share of the occupying herd, rounded to one decimal."""
