"""Queue of writes made while offline, replayed once the server is back."""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

import httpx

from cricket_pro.sync.api_client import CricketApiClient
from cricket_pro.sync.local_store import PENDING_SYNC_KEY, LocalStore

logger = logging.getLogger(__name__)


@dataclass
class PendingWrite:
    """A queued request."""

    method: str
    url: str
    body: Any = None


class PendingSyncQueue:
    """Pending writes persisted in the local store, oldest first."""

    def __init__(self, store: LocalStore):
        self.store = store

    def pending(self) -> list[PendingWrite]:
        raw = self.store.get_item(PENDING_SYNC_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Discarding unreadable pending sync queue: {e}")
            return []
        return [PendingWrite(**item) for item in items]

    def _save(self, writes: list[PendingWrite]) -> None:
        if writes:
            self.store.set_item(PENDING_SYNC_KEY, json.dumps([asdict(w) for w in writes]))
        else:
            self.store.remove_item(PENDING_SYNC_KEY)

    def enqueue(self, method: str, url: str, body: Any = None) -> None:
        writes = self.pending()
        writes.append(PendingWrite(method=method.upper(), url=url, body=body))
        self._save(writes)

    def clear(self) -> None:
        self.store.remove_item(PENDING_SYNC_KEY)

    def __len__(self) -> int:
        return len(self.pending())

    async def replay(self, client: CricketApiClient) -> int:
        """Send queued writes in order.

        Stops at the first failure and keeps it and everything after it
        queued; the queue is cleared only when every write went through.

        Returns:
            Number of writes sent successfully
        """
        writes = self.pending()
        for index, write in enumerate(writes):
            try:
                await client.request(write.method, write.url, write.body, queue_offline=False)
            except httpx.HTTPError as e:
                logger.error(f"Replay of {write.method} {write.url} failed: {e}")
                self._save(writes[index:])
                return index
        self.clear()
        if writes:
            logger.info(f"Replayed {len(writes)} pending write(s)")
        return len(writes)
