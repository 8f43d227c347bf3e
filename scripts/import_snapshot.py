#!/usr/bin/env python3
"""Import a backup file into a running server.

Usage:
    uv run python scripts/import_snapshot.py backup.json [--clear] [--base-url URL]

Every record is recreated with a new id. Records that fail are reported
and skipped; the exit status is 1 if anything failed.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from cricket_pro.config import configure_logging, settings
from cricket_pro.models.snapshot import ImportResult
from cricket_pro.sync import CricketApiClient, DataExportManager, SnapshotFormatError


async def import_snapshot(base_url: str, path: Path, clear: bool) -> ImportResult:
    data = DataExportManager.parse_import_file(path)
    async with CricketApiClient(base_url, timeout=settings.request_timeout) as client:
        return await DataExportManager(client).import_data(data, clear_existing=clear)


def main():
    parser = argparse.ArgumentParser(description="Import a backup file into the server")
    parser.add_argument("path", type=Path, help="Backup JSON file")
    parser.add_argument("--clear", action="store_true", help="Delete all existing data first")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API server root")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    try:
        result = asyncio.run(import_snapshot(args.base_url, args.path, args.clear))
    except SnapshotFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Imported {result.teams_imported} teams, {result.players_imported} players, "
        f"{result.matches_imported} matches"
    )
    for error in result.errors:
        print(f"  ✗ {error}")
    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
