"""Tests for dashboard reports and herd search."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from pyfeedlot.models import CattleStatus
from pyfeedlot.reports import capacity_report, days_on_feed_report, search_cattle, status_report
from pyfeedlot.store import FeedlotStore


def _add(store: FeedlotStore, tag: str, lot_id: int, **extra: object) -> None:
    store.add_cattle({"tag_number": tag, "lot_id": lot_id, **extra})


# ---------------------------------------------------------------------------
# Capacity and status
# ---------------------------------------------------------------------------


class TestCapacityReport:
    def test_rows_and_total(self, small_store: FeedlotStore) -> None:
        _add(small_store, "A", 1)
        _add(small_store, "B", 1)
        _add(small_store, "C", 2, status="medical")
        _add(small_store, "D", 2, status="deceased")

        report = capacity_report(small_store)
        assert [row.name for row in report.rows] == ["Lot 1", "Lot 2", "Lot 3"]
        first, second, third = report.rows
        assert (first.occupied, first.available, first.percent_full) == (2, 98, 2.0)
        assert (second.occupied, second.available) == (1, 99)
        assert third.occupied == 0

        assert report.total.name == "TOTAL"
        assert report.total.capacity == 300
        assert report.total.occupied == 3
        assert report.total.available == 297
        assert report.total.percent_full == 1.0

    def test_zero_capacity_lot_reports_zero_percent(self, small_store: FeedlotStore) -> None:
        lots = small_store.get_lots()
        small_store.save_lots([lots[0].model_copy(update={"capacity": 0}), *lots[1:]])
        report = capacity_report(small_store)
        assert report.rows[0].percent_full == 0.0


class TestStatusReport:
    def test_counts_per_lot(self, small_store: FeedlotStore) -> None:
        _add(small_store, "A", 1)
        _add(small_store, "B", 1, status="pregnant")
        _add(small_store, "C", 3, status="processing")
        _add(small_store, "D", 3, status="deceased")

        report = status_report(small_store)
        lot1, lot2, lot3 = report.rows
        assert (lot1.active, lot1.pregnant) == (1, 1)
        assert lot2.model_dump(exclude={"name"}) == dict.fromkeys(
            ["active", "medical", "pregnant", "processing", "deceased"], 0
        )
        assert (lot3.processing, lot3.deceased) == (1, 1)
        assert report.total.active == 1
        assert report.total.processing == 1
        assert report.total.deceased == 1


# ---------------------------------------------------------------------------
# Days on feed
# ---------------------------------------------------------------------------


class TestDaysOnFeed:
    def test_bucket_boundaries_are_inclusive(self, small_store: FeedlotStore, clock) -> None:
        today = clock().date()
        for days in (0, 30, 31, 60, 181):
            _add(small_store, f"D{days}", 1, date_added=today - timedelta(days=days))

        buckets = days_on_feed_report(small_store)
        counts = {bucket.label: bucket.count for bucket in buckets}
        assert counts == {
            "0-30 days": 2,
            "31-60 days": 2,
            "61-90 days": 0,
            "91-120 days": 0,
            "121-150 days": 0,
            "151-180 days": 0,
            "180+ days": 1,
        }
        assert buckets[0].percent == 40.0
        assert buckets[-1].percent == 20.0

    def test_only_occupying_cattle_counted(self, small_store: FeedlotStore) -> None:
        _add(small_store, "A", 1)
        _add(small_store, "B", 1, status="deceased")
        _add(small_store, "C", 1, status="processing")
        buckets = days_on_feed_report(small_store)
        assert sum(bucket.count for bucket in buckets) == 1

    def test_empty_herd(self, small_store: FeedlotStore) -> None:
        buckets = days_on_feed_report(small_store)
        assert len(buckets) == 7
        assert all(bucket.count == 0 and bucket.percent == 0.0 for bucket in buckets)

    def test_percent_rounded_to_one_decimal(self, small_store: FeedlotStore) -> None:
        _add(small_store, "A", 1, date_added=date(2026, 3, 1))
        _add(small_store, "B", 1, date_added=date(2026, 3, 1))
        _add(small_store, "C", 1, date_added=date(2025, 1, 1))
        buckets = days_on_feed_report(small_store)
        assert buckets[0].percent == 66.7
        assert buckets[-1].percent == 33.3


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearch:
    @pytest.fixture
    def herd(self, small_store: FeedlotStore) -> FeedlotStore:
        _add(small_store, "T02-0002", 2, breed="Angus")
        _add(small_store, "T01-0009", 1, breed="Hereford")
        _add(small_store, "T02-0001", 2, breed="Charolais", status="medical")
        _add(small_store, "T03-0001", 3, breed="Black Angus")
        return small_store

    def test_no_filters_sorted_by_lot_then_tag(self, herd: FeedlotStore) -> None:
        tags = [a.tag_number for a in search_cattle(herd)]
        assert tags == ["T01-0009", "T02-0001", "T02-0002", "T03-0001"]

    def test_query_matches_breed_case_insensitively(self, herd: FeedlotStore) -> None:
        tags = [a.tag_number for a in search_cattle(herd, "angus")]
        assert tags == ["T02-0002", "T03-0001"]

    def test_query_matches_tag(self, herd: FeedlotStore) -> None:
        assert [a.tag_number for a in search_cattle(herd, " t01 ")] == ["T01-0009"]

    def test_query_matches_lot_label(self, herd: FeedlotStore) -> None:
        tags = [a.tag_number for a in search_cattle(herd, "Lot 3")]
        assert tags == ["T03-0001"]

    def test_status_and_lot_filters(self, herd: FeedlotStore) -> None:
        assert [a.tag_number for a in search_cattle(herd, status=CattleStatus.MEDICAL)] == ["T02-0001"]
        assert [a.tag_number for a in search_cattle(herd, status="active", lot_id=2)] == ["T02-0002"]

    def test_unknown_status_rejected(self, herd: FeedlotStore) -> None:
        with pytest.raises(ValueError):
            search_cattle(herd, status="sold")
