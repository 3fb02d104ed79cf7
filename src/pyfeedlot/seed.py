"""Deterministic demo population for a fresh store.

The same ``seed`` and ``now`` always produce the same lots, cattle and
alerts (ids aside, which come from ``id_factory``).
"""

from __future__ import annotations

import dataclasses
import random
from collections.abc import Callable
from datetime import datetime, timedelta

from pyfeedlot._ids import generate_id
from pyfeedlot.models import (
    Alert,
    AlertType,
    Animal,
    CattleStatus,
    HistoryAction,
    HistoryEntry,
    Lot,
)

BREEDS: tuple[str, ...] = (
    "Angus",
    "Hereford",
    "Charolais",
    "Simmental",
    "Limousin",
    "Red Angus",
    "Brahman",
    "Shorthorn",
)

MIN_HEAD_PER_LOT = 40
MAX_HEAD_PER_LOT = 119
MIN_DAYS_ON_FEED = 10
MAX_DAYS_ON_FEED = 189
MIN_WEIGHT = 600
MAX_WEIGHT = 1299

# Cumulative roll thresholds; anything above the last one stays active.
_STATUS_ROLLS: tuple[tuple[float, CattleStatus], ...] = (
    (0.03, CattleStatus.MEDICAL),
    (0.06, CattleStatus.PREGNANT),
    (0.08, CattleStatus.PROCESSING),
    (0.09, CattleStatus.DECEASED),
)


@dataclasses.dataclass
class DemoData:
    lots: list[Lot]
    cattle: list[Animal]
    alerts: list[Alert]


def default_lots(lot_count: int, lot_capacity: int) -> list[Lot]:
    return [Lot(id=i, name=f"Lot {i}", capacity=lot_capacity) for i in range(1, lot_count + 1)]


def tag_number(lot_id: int, index: int) -> str:
    """Demo tag format: ``T<lot:02>-<n:04>``, *index* starting at 1."""
    return f"T{lot_id:02d}-{index:04d}"


def _roll_status(rng: random.Random) -> CattleStatus:
    roll = rng.random()
    for threshold, status in _STATUS_ROLLS:
        if roll < threshold:
            return status
    return CattleStatus.ACTIVE


def _first_tag(cattle: list[Animal], lot_id: int, status: CattleStatus, fallback: str) -> str:
    for animal in cattle:
        if animal.lot_id == lot_id and animal.status == status:
            return animal.tag_number
    return fallback


def _sample_alerts(
    cattle: list[Animal],
    lots: list[Lot],
    now: datetime,
    id_factory: Callable[[], str],
) -> list[Alert]:
    lot_ids = {lot.id for lot in lots}
    templates = (
        (AlertType.PROCESSING, 2, CattleStatus.PROCESSING, "T02-0005", "Head moved to processing from Lot 2", 1, False),
        (AlertType.MEDICAL, 5, CattleStatus.MEDICAL, "T05-0012", "Head placed in medical care in Lot 5", 2, False),
        (AlertType.PREGNANCY, 3, CattleStatus.PREGNANT, "T03-0008", "Pregnancy confirmed for head in Lot 3", 4, True),
    )
    alerts: list[Alert] = []
    for alert_type, lot_id, status, fallback, message, hours_ago, read in templates:
        if lot_id not in lot_ids:
            continue
        alerts.append(
            Alert(
                id=id_factory(),
                type=alert_type,
                lot_id=lot_id,
                tag_number=_first_tag(cattle, lot_id, status, fallback),
                message=message,
                timestamp=now - timedelta(hours=hours_ago),
                read=read,
            )
        )
    return alerts


def generate_demo_data(
    *,
    lot_count: int,
    lot_capacity: int,
    now: datetime,
    seed: int | None = None,
    id_factory: Callable[[], str] = generate_id,
) -> DemoData:
    """Build a randomized but reproducible demo herd.

    Each lot gets 40-119 head (never more than its capacity), added
    10-189 days before *now*, weighing 600-1299 lbs.  Roughly 91% are
    active; the rest are split between medical, pregnant, processing and
    deceased.  Three sample alerts are included, newest first.
    """
    rng = random.Random(seed)
    lots = default_lots(lot_count, lot_capacity)
    cattle: list[Animal] = []

    for lot in lots:
        head_count = min(rng.randint(MIN_HEAD_PER_LOT, MAX_HEAD_PER_LOT), lot.capacity)
        for index in range(1, head_count + 1):
            days_ago = rng.randint(MIN_DAYS_ON_FEED, MAX_DAYS_ON_FEED)
            added_at = now - timedelta(days=days_ago)
            breed = rng.choice(BREEDS)
            weight = rng.randint(MIN_WEIGHT, MAX_WEIGHT)
            status = _roll_status(rng)
            cattle.append(
                Animal(
                    id=id_factory(),
                    tag_number=tag_number(lot.id, index),
                    lot_id=lot.id,
                    breed=breed,
                    weight=weight,
                    date_added=added_at.date(),
                    status=status,
                    status_date=added_at,
                    history=[
                        HistoryEntry(
                            date=added_at,
                            action=HistoryAction.ADDED,
                            status=status,
                            notes="Initial entry",
                        )
                    ],
                )
            )

    return DemoData(
        lots=lots,
        cattle=cattle,
        alerts=_sample_alerts(cattle, lots, now, id_factory),
    )
