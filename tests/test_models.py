"""Tests for model parsing and serialization."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from pyfeedlot.models import (
    Animal,
    CattleInput,
    CattleStatus,
    HistoryAction,
    HistoryEntry,
    Lot,
    LotStats,
)


class TestCattleInput:
    def test_form_values_are_normalized(self) -> None:
        entry = CattleInput.model_validate(
            {
                "tagNumber": "  A-17 ",
                "lotId": "3",
                "breed": " Angus ",
                "weight": "1,0",
                "status": "",
                "notes": None,
            }
        )
        assert entry.tag_number == "A-17"
        assert entry.lot_id == 3
        assert entry.breed == "Angus"
        assert entry.weight is None
        assert entry.status == CattleStatus.ACTIVE
        assert entry.notes == ""

    def test_numeric_strings(self) -> None:
        entry = CattleInput(tag_number="A", lot_id=" 2 ", weight="850.6")
        assert entry.lot_id == 2
        assert entry.weight == 850

    def test_zero_weight_is_unknown(self) -> None:
        assert CattleInput(tag_number="A", lot_id=1, weight=0).weight is None

    def test_blank_tag_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CattleInput(tag_number="   ", lot_id=1)

    def test_non_numeric_lot_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CattleInput(tag_number="A", lot_id="north")

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CattleInput(tag_number="A", lot_id=1, status="sold")

    def test_date_added_accepts_timestamp(self) -> None:
        entry = CattleInput(tag_number="A", lot_id=1, date_added="2026-01-02T08:00:00Z")
        assert entry.date_added == date(2026, 1, 2)
        assert CattleInput(tag_number="A", lot_id=1, date_added="").date_added is None


class TestHistoryEntry:
    def test_from_alias(self) -> None:
        entry = HistoryEntry.model_validate(
            {"date": "2026-03-01T10:00:00Z", "action": "moved", "from": "Lot 1", "to": "Lot 2"}
        )
        assert entry.action == HistoryAction.MOVED
        assert entry.from_ == "Lot 1"
        assert entry.to_document()["from"] == "Lot 1"

    def test_naive_date_treated_as_utc(self) -> None:
        entry = HistoryEntry(date=datetime(2026, 3, 1, 10, 0), action=HistoryAction.ADDED)
        assert entry.date == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)

    def test_aware_date_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        entry = HistoryEntry(date=datetime(2026, 3, 1, 12, 0, tzinfo=plus_two), action="added")
        assert entry.date == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
        assert entry.date.tzinfo is UTC


class TestAnimal:
    def _animal(self, **overrides: object) -> Animal:
        data: dict[str, object] = {
            "id": "a1",
            "tagNumber": "T01-0001",
            "lotId": 1,
            "dateAdded": "2026-01-05T14:30:00.000Z",
            "statusDate": "2026-01-05T14:30:00.000Z",
            "unknownField": "ignored",
        }
        data.update(overrides)
        return Animal.model_validate(data)

    def test_document_shape(self) -> None:
        animal = self._animal()
        doc = animal.to_document()
        assert doc["tagNumber"] == "T01-0001"
        assert doc["dateAdded"] == "2026-01-05"
        assert doc["status"] == "active"
        assert "unknownField" not in doc

    @pytest.mark.parametrize(
        ("status", "occupies"),
        [("active", True), ("medical", True), ("pregnant", True), ("processing", False), ("deceased", False)],
    )
    def test_occupies_lot(self, status: str, occupies: bool) -> None:
        assert self._animal(status=status).occupies_lot is occupies

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            self._animal().status = CattleStatus.DECEASED


class TestLot:
    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Lot(id=0, name="Lot 0", capacity=10)
        with pytest.raises(ValidationError):
            Lot(id=1, name="Lot 1", capacity=-5)

    def test_over_capacity(self) -> None:
        stats = LotStats(total=510, available=-10, active=510, processing=0, deceased=0, medical=0, pregnant=0)
        assert stats.is_over_capacity is True
