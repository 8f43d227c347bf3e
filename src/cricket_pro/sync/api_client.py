"""Async HTTP client for the Cricket Pro REST API."""

import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx

if TYPE_CHECKING:
    from cricket_pro.sync.pending_queue import PendingSyncQueue

logger = logging.getLogger(__name__)

Record = dict[str, Any]

WRITE_METHODS = {"POST", "PATCH", "PUT", "DELETE"}


class CricketApiClient:
    """DataGateway over HTTP.

    When a pending queue is attached, writes that fail because the server
    is unreachable are queued for later replay instead of raising.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        pending_queue: Optional["PendingSyncQueue"] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Server root, e.g. http://127.0.0.1:8000
            timeout: Request timeout in seconds
            transport: Optional transport (tests pass httpx.ASGITransport)
            pending_queue: Queue for writes made while offline
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.pending_queue = pending_queue
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "CricketApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        queue_offline: bool = True,
    ) -> httpx.Response | None:
        """Send a request and raise for error statuses.

        Returns:
            The response, or None when the write was queued for later

        Raises:
            httpx.HTTPStatusError: On a 4xx/5xx response
            httpx.TransportError: When unreachable and the write can't be queued
        """
        client = await self._get_client()
        try:
            response = await client.request(method, url, json=body)
        except httpx.TransportError as e:
            if queue_offline and self.pending_queue is not None and method.upper() in WRITE_METHODS:
                logger.warning(f"Server unreachable, queued {method} {url}: {e}")
                self.pending_queue.enqueue(method, url, body)
                return None
            raise
        response.raise_for_status()
        return response

    async def _list(self, path: str) -> list[Record]:
        response = await self.request("GET", path)
        return response.json()

    async def _create(self, path: str, data: Record) -> Record | None:
        response = await self.request("POST", path, data)
        return response.json() if response is not None else None

    async def _update(self, path: str, data: Record) -> Record | None:
        try:
            response = await self.request("PATCH", path, data)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise
        return response.json() if response is not None else None

    async def _delete(self, path: str) -> bool:
        try:
            response = await self.request("DELETE", path)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return False
            raise
        return response is not None

    # Teams

    async def list_teams(self) -> list[Record]:
        return await self._list("/api/teams")

    async def create_team(self, data: Record) -> Record | None:
        return await self._create("/api/teams", data)

    async def update_team(self, team_id: str, data: Record) -> Record | None:
        return await self._update(f"/api/teams/{team_id}", data)

    async def delete_team(self, team_id: str) -> bool:
        return await self._delete(f"/api/teams/{team_id}")

    # Players

    async def list_players(self) -> list[Record]:
        return await self._list("/api/players")

    async def create_player(self, data: Record) -> Record | None:
        return await self._create("/api/players", data)

    async def update_player(self, player_id: str, data: Record) -> Record | None:
        return await self._update(f"/api/players/{player_id}", data)

    async def delete_player(self, player_id: str) -> bool:
        return await self._delete(f"/api/players/{player_id}")

    # Matches

    async def list_matches(self) -> list[Record]:
        return await self._list("/api/matches")

    async def create_match(self, data: Record) -> Record | None:
        return await self._create("/api/matches", data)

    async def update_match(self, match_id: str, data: Record) -> Record | None:
        return await self._update(f"/api/matches/{match_id}", data)

    async def delete_match(self, match_id: str) -> bool:
        return await self._delete(f"/api/matches/{match_id}")

    async def start_match(self, match_id: str) -> Record | None:
        response = await self.request("POST", f"/api/matches/{match_id}/start")
        return response.json() if response is not None else None

    async def score(self, match_id: str, action: Record) -> Record | None:
        response = await self.request("POST", f"/api/matches/{match_id}/score", action)
        return response.json() if response is not None else None
