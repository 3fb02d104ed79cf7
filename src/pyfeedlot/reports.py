"""Dashboard reports computed from store contents."""

from __future__ import annotations

from pyfeedlot._constants import DAYS_ON_FEED_BUCKETS
from pyfeedlot.models import (
    Animal,
    CapacityReport,
    CapacityRow,
    CattleStatus,
    DaysOnFeedBucket,
    StatusReport,
    StatusRow,
)
from pyfeedlot.store import FeedlotStore


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)


def capacity_report(store: FeedlotStore) -> CapacityReport:
    """Occupied/available head space per lot, with a total row."""
    rows: list[CapacityRow] = []
    for lot in store.get_lots():
        stats = store.get_lot_stats(lot.id)
        rows.append(
            CapacityRow(
                name=lot.name,
                capacity=lot.capacity,
                occupied=stats.total,
                available=stats.available,
                percent_full=_percent(stats.total, lot.capacity),
            )
        )
    capacity = sum(row.capacity for row in rows)
    occupied = sum(row.occupied for row in rows)
    total = CapacityRow(
        name="TOTAL",
        capacity=capacity,
        occupied=occupied,
        available=sum(row.available for row in rows),
        percent_full=_percent(occupied, capacity),
    )
    return CapacityReport(rows=rows, total=total)


def status_report(store: FeedlotStore) -> StatusReport:
    rows: list[StatusRow] = []
    for lot in store.get_lots():
        stats = store.get_lot_stats(lot.id)
        rows.append(
            StatusRow(
                name=lot.name,
                active=stats.active,
                medical=stats.medical,
                pregnant=stats.pregnant,
                processing=stats.processing,
                deceased=stats.deceased,
            )
        )
    total = StatusRow(
        name="TOTAL",
        active=sum(row.active for row in rows),
        medical=sum(row.medical for row in rows),
        pregnant=sum(row.pregnant for row in rows),
        processing=sum(row.processing for row in rows),
        deceased=sum(row.deceased for row in rows),
    )
    return StatusReport(rows=rows, total=total)


def days_on_feed_report(store: FeedlotStore) -> list[DaysOnFeedBucket]:
    """Bucket the occupying herd by days on feed.

    Bucket upper bounds are inclusive: day 30 is in ``0-30 days`` and
    day 31 in ``31-60 days``.
    """
    herd = [animal for animal in store.get_all_cattle() if animal.occupies_lot]
    counts = [0] * len(DAYS_ON_FEED_BUCKETS)
    for animal in herd:
        days = store.get_days_on_feed(animal.date_added)
        for i, (_, upper) in enumerate(DAYS_ON_FEED_BUCKETS):
            if upper is None or days <= upper:
                counts[i] += 1
                break
    return [
        DaysOnFeedBucket(label=label, count=count, percent=_percent(count, len(herd)))
        for (label, _), count in zip(DAYS_ON_FEED_BUCKETS, counts, strict=True)
    ]


def search_cattle(
    store: FeedlotStore,
    query: str = "",
    *,
    status: CattleStatus | str | None = None,
    lot_id: int | None = None,
) -> list[Animal]:
    """Filter cattle the way the herd table does.

    *query* matches case-insensitively against the tag number, breed or
    ``"lot <id>"``.  Results are sorted by lot, then tag number.
    """
    needle = query.strip().lower()
    wanted_status = CattleStatus(status) if status is not None else None
    matches: list[Animal] = []
    for animal in store.get_all_cattle():
        if needle and not (
            needle in animal.tag_number.lower()
            or needle in animal.breed.lower()
            or needle in f"lot {animal.lot_id}"
        ):
            continue
        if wanted_status is not None and animal.status != wanted_status:
            continue
        if lot_id is not None and animal.lot_id != lot_id:
            continue
        matches.append(animal)
    matches.sort(key=lambda a: (a.lot_id, a.tag_number))
    return matches
