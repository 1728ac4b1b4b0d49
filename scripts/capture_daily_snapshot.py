"""Capture today's platform snapshot into the configured database."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from erm_analytics.application.use_cases import (
    SnapshotPersistenceError,
    capture_daily_snapshot,
    get_snapshot_trend,
)
from erm_analytics.config import get_settings
from erm_analytics.domain.entities import PlatformStats
from erm_analytics.infrastructure.database import SessionLocal, initialize_database
from erm_analytics.infrastructure.repositories import SnapshotRepository, SqlKeyValueStore
from erm_analytics.utils import SystemClock


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the snapshot capture."""

    parser = argparse.ArgumentParser(
        description="Record today's platform totals in the rolling snapshot history.",
    )
    parser.add_argument(
        "stats_file",
        type=Path,
        help="JSON file with totalWorkspaces, totalUsers, activeUsers, totalRisks, "
        "totalControls, totalReports and storageUsed",
    )
    parser.add_argument(
        "--trend",
        default="totalUsers",
        help="Snapshot metric whose 7-day trend is printed (default: totalUsers)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args()


def load_stats(path: Path) -> PlatformStats:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Could not read stats file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SystemExit(f"Stats file {path} must contain a JSON object")
    return PlatformStats.from_mapping(payload)


def main() -> None:
    """Capture the snapshot using the provided command line arguments."""

    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    stats = load_stats(args.stats_file)
    settings = get_settings()
    clock = SystemClock()

    initialize_database()

    session = SessionLocal()
    try:
        repository = SnapshotRepository(SqlKeyValueStore(session))
        capture = capture_daily_snapshot(
            repository,
            lambda: stats,
            clock=clock,
            retention=settings.snapshot_retention_days,
        )
        trend = get_snapshot_trend(repository.load(), args.trend, clock=clock)
    except SnapshotPersistenceError as exc:
        raise SystemExit(f"Snapshot computed but not saved: {exc}") from exc
    except SQLAlchemyError as exc:
        raise SystemExit(f"Error reading the snapshot history: {exc}") from exc
    else:
        state = "captured" if capture.created else "already present"
        print(
            f"Snapshot for {capture.snapshot.date} {state}:\n"
            f"  Workspaces: {capture.snapshot.total_workspaces}\n"
            f"  Users: {capture.snapshot.total_users} ({capture.snapshot.active_users} active)\n"
            f"  Risks/Controls/Reports: {capture.snapshot.total_risks}/"
            f"{capture.snapshot.total_controls}/{capture.snapshot.total_reports}\n"
            f"  {args.trend} 7-day trend: {trend.direction} {trend.trend}%"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
