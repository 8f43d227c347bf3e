#!/usr/bin/env python3
"""Reconcile a running server with the local snapshot.

Usage:
    uv run python scripts/reconcile.py [--seed-defaults] [--base-url URL]

If the local store holds a non-empty snapshot that differs from the
server's data, the server is wiped and rebuilt from it. Default teams are
seeded only with --seed-defaults (or SEED_DEFAULT_TEAMS=true) and only
into an empty server.
"""

import argparse
import asyncio
import sys

from cricket_pro.config import configure_logging, settings
from cricket_pro.sync import CricketApiClient, LocalStore, ReconcileResult, reconcile


async def run_reconcile(base_url: str, seed_defaults: bool) -> ReconcileResult:
    store = LocalStore(settings.local_store_path)
    async with CricketApiClient(base_url, timeout=settings.request_timeout) as client:
        return await reconcile(client, store, seed_defaults=seed_defaults)


def main():
    parser = argparse.ArgumentParser(description="Reconcile server data with the local snapshot")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API server root")
    parser.add_argument(
        "--seed-defaults",
        action="store_true",
        default=settings.seed_default_teams,
        help="Seed default teams into an empty server",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)
    result = asyncio.run(run_reconcile(args.base_url, args.seed_defaults))
    print(f"Reconciliation: {result.action}")
    for error in result.errors:
        print(f"  ✗ {error}")
    sys.exit(0 if not result.errors else 1)


if __name__ == "__main__":
    main()
