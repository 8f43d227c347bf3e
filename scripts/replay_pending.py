#!/usr/bin/env python3
"""Send writes queued while the server was unreachable.

Usage:
    uv run python scripts/replay_pending.py [--base-url URL] [--discard]
"""

import argparse
import asyncio
import sys

from cricket_pro.config import configure_logging, settings
from cricket_pro.sync import CricketApiClient, LocalStore, PendingSyncQueue


async def replay_pending(base_url: str) -> tuple[int, int]:
    queue = PendingSyncQueue(LocalStore(settings.local_store_path))
    async with CricketApiClient(base_url, timeout=settings.request_timeout) as client:
        sent = await queue.replay(client)
    return sent, len(queue)


def main():
    parser = argparse.ArgumentParser(description="Replay queued offline writes")
    parser.add_argument("--base-url", default=settings.api_base_url, help="API server root")
    parser.add_argument("--discard", action="store_true", help="Drop the queue without sending")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    if args.discard:
        queue = PendingSyncQueue(LocalStore(settings.local_store_path))
        print(f"Discarded {len(queue)} pending write(s)")
        queue.clear()
        return

    sent, remaining = asyncio.run(replay_pending(args.base_url))
    print(f"Sent {sent} write(s), {remaining} still pending")
    sys.exit(0 if remaining == 0 else 1)


if __name__ == "__main__":
    main()
