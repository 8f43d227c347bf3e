#!/usr/bin/env python3
"""Export every team, player and match from a running server to a backup file.

Usage:
    uv run python scripts/export_snapshot.py [--output backups/] [--base-url URL]

A directory (or no --output) gets the dated default name
cricket-pro-backup-YYYY-MM-DD.json. With --local the snapshot is also kept
in the local store for the next reconciliation.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from cricket_pro.config import configure_logging, settings
from cricket_pro.sync import CricketApiClient, DataExportManager, LocalStore

logger = logging.getLogger(__name__)


async def export_snapshot(base_url: str, output: Path | None, keep_local: bool) -> Path:
    store = LocalStore(settings.local_store_path) if keep_local else None
    async with CricketApiClient(base_url, timeout=settings.request_timeout) as client:
        manager = DataExportManager(client, store)
        snapshot = await manager.export_data()
        if keep_local and manager.save_to_local_storage(snapshot):
            logger.info(f"Snapshot saved to local store {settings.local_store_path}")
        return manager.download_data_as_file(snapshot, output)


def main():
    parser = argparse.ArgumentParser(description="Export server data to a backup file")
    parser.add_argument("--output", type=Path, help="Output file or directory")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API server root")
    parser.add_argument("--local", action="store_true", help="Also save to the local store")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    path = asyncio.run(export_snapshot(args.base_url, args.output, args.local))
    print(f"Exported to {path}")


if __name__ == "__main__":
    main()
