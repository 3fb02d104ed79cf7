#!/usr/bin/env python3
"""Dump the contents of a pyfeedlot store.

Opens a store, optionally seeds it with demo data, and prints lot
stats, the capacity / status / days-on-feed reports and the newest
alerts so you can eyeball what is persisted.

Usage
-----
Dump a file-backed store::

    export FEEDLOT_DATA_DIR="$HOME/.feedlot"
    python scripts/dump_store.py

Options::

    --data-dir DIR      Read JSON documents from DIR (default: FEEDLOT_DATA_DIR)
    --memory            Use a throwaway in-memory store instead
    --init              Seed demo data if the store was never initialized
    --seed N            Random seed used when seeding
    --search QUERY      Also list cattle matching QUERY
    --alerts N          Number of alerts to show (default: 10)
    --json              Output as machine-readable JSON
    --output FILE       Write JSON output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfeedlot import FeedlotConfig, FeedlotStore, MemoryStorage, format_time  # noqa: E402
from pyfeedlot.reports import capacity_report, days_on_feed_report, search_cattle, status_report  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _table(headers: list[str], rows: list[list[Any]]) -> list[str]:
    widths = [max(len(str(cell)) for cell in column) for column in zip(headers, *rows, strict=False)]
    lines = ["  " + "  ".join(str(h).ljust(w) for h, w in zip(headers, widths, strict=True))]
    lines.append("  " + "  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  " + "  ".join(str(cell).ljust(w) for cell, w in zip(row, widths, strict=True)))
    return lines


def _open_store(args: argparse.Namespace) -> FeedlotStore:
    if args.memory:
        return FeedlotStore(MemoryStorage(), config=FeedlotConfig.from_env())
    overrides: dict[str, Any] = {}
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    return FeedlotStore.open(FeedlotConfig.from_env(**overrides))


def dump_store(store: FeedlotStore, *, search: str | None, alert_limit: int) -> tuple[dict[str, Any], list[str]]:
    """Collect the store contents as a JSON-ready dict and printable lines."""
    out: list[str] = []
    overall = store.get_overall_stats()
    capacity = capacity_report(store)
    statuses = status_report(store)
    days = days_on_feed_report(store)
    alerts = store.get_alerts()[:alert_limit]

    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "initialized": store.is_initialized(),
        "overall": overall.model_dump(mode="json"),
        "capacity": capacity.model_dump(mode="json"),
        "status": statuses.model_dump(mode="json"),
        "days_on_feed": [bucket.model_dump(mode="json") for bucket in days],
        "alerts": [alert.to_document() for alert in alerts],
        "unread": store.get_unread_count(),
    }

    out.append(_section("OVERVIEW"))
    out.append(f"  initialized : {result['initialized']}")
    out.append(f"  cattle      : {overall.total_cattle}")
    out.append(f"  occupied    : {overall.total_occupied}/{overall.total_capacity}")
    out.append(f"  unread      : {result['unread']}")

    out.append(_section("CAPACITY"))
    out.extend(
        _table(
            ["lot", "capacity", "occupied", "available", "% full"],
            [[r.name, r.capacity, r.occupied, r.available, r.percent_full] for r in [*capacity.rows, capacity.total]],
        )
    )

    out.append(_section("STATUS"))
    out.extend(
        _table(
            ["lot", "active", "medical", "pregnant", "processing", "deceased"],
            [
                [r.name, r.active, r.medical, r.pregnant, r.processing, r.deceased]
                for r in [*statuses.rows, statuses.total]
            ],
        )
    )

    out.append(_section("DAYS ON FEED"))
    out.extend(_table(["range", "head", "%"], [[b.label, b.count, b.percent] for b in days]))

    out.append(_section(f"ALERTS (newest {len(alerts)})"))
    now = store.now()
    for alert in alerts:
        marker = " " if alert.read else "*"
        out.append(f"  {marker} {format_time(alert.timestamp, now):>10}  [{alert.type}] {alert.message}")

    if search is not None:
        matches = search_cattle(store, search)
        result["search"] = [animal.to_document() for animal in matches]
        out.append(_section(f"SEARCH {search!r} ({len(matches)} matches)"))
        out.extend(
            _table(
                ["tag", "lot", "breed", "weight", "status", "days"],
                [
                    [a.tag_number, a.lot_id, a.breed, a.weight or "", a.status, store.get_days_on_feed(a.date_added)]
                    for a in matches
                ],
            )
        )

    return result, out


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump pyfeedlot store contents for debugging / development.",
    )
    parser.add_argument("--data-dir", help="Directory holding the JSON documents (default: FEEDLOT_DATA_DIR)")
    parser.add_argument("--memory", action="store_true", help="Use a throwaway in-memory store")
    parser.add_argument("--init", action="store_true", help="Seed demo data if the store is not initialized")
    parser.add_argument("--seed", type=int, help="Random seed used when seeding")
    parser.add_argument("--search", help="List cattle matching this query")
    parser.add_argument("--alerts", type=int, default=10, help="Number of alerts to show")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    store = _open_store(args)
    if (args.init or args.memory) and store.ensure_initialized(seed=args.seed):
        print("Seeded demo data", file=sys.stderr)

    result, out = dump_store(store, search=args.search, alert_limit=args.alerts)

    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    else:
        print("\n".join(out))


if __name__ == "__main__":
    main()
