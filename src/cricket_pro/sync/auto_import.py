"""Startup reconciliation between the local snapshot and the server.

Precedence, in order:

1. A local snapshot that is present and non-empty wins. If the server's
   data looks different (collection sizes or the set of team names), the
   server is wiped and rebuilt from the snapshot.
2. Otherwise server state is left as it is.
3. Default teams are seeded only when explicitly enabled and the server
   is empty.

Every step is best-effort: failures are logged and collected, and a crash
part-way through can leave the server partially rebuilt.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

import httpx

from cricket_pro.models.snapshot import Snapshot
from cricket_pro.sync.export_manager import RECORD_ERRORS, DataExportManager, clear_all_data
from cricket_pro.sync.gateway import DataGateway
from cricket_pro.sync.local_store import LocalStore

logger = logging.getLogger(__name__)

DEFAULT_TEAMS = [
    {"name": "Mumbai Indians", "shortName": "MI"},
    {"name": "Chennai Super Kings", "shortName": "CSK"},
    {"name": "Royal Challengers Bangalore", "shortName": "RCB"},
    {"name": "Kolkata Knight Riders", "shortName": "KKR"},
]


@dataclass
class ReconcileResult:
    """What reconciliation did."""

    action: Literal["replaced", "unchanged", "seeded", "skipped"]
    errors: list[str] = field(default_factory=list)


def snapshots_match(local: Snapshot, server: Snapshot) -> bool:
    """Shallow comparison: equal collection sizes and identical team-name sets."""
    if (
        len(local.teams) != len(server.teams)
        or len(local.players) != len(server.players)
        or len(local.matches) != len(server.matches)
    ):
        return False
    local_names = {t.get("name") for t in local.teams}
    server_names = {t.get("name") for t in server.teams}
    return local_names == server_names


async def seed_default_teams(gateway: DataGateway) -> list[str]:
    errors = []
    for team in DEFAULT_TEAMS:
        try:
            await gateway.create_team(team)
            logger.info(f"Seeded team: {team['name']}")
        except RECORD_ERRORS as e:
            logger.error(f"Failed to seed team {team['name']}: {e}")
            errors.append(f"Failed to seed team: {team['name']}")
    return errors


async def reconcile(
    gateway: DataGateway,
    store: LocalStore,
    seed_defaults: bool = False,
) -> ReconcileResult:
    """Bring the server in line with the local snapshot, if there is one.

    Args:
        gateway: Server access (API client or repository gateway)
        store: Local store holding the backup snapshot
        seed_defaults: Seed DEFAULT_TEAMS into an empty server when no snapshot exists

    Returns:
        ReconcileResult naming the action taken
    """
    manager = DataExportManager(gateway, store)
    local = manager.load_from_local_storage()

    try:
        server = await manager.export_data()
    except httpx.HTTPError as e:
        logger.error(f"Reconciliation skipped, could not fetch server data: {e}")
        return ReconcileResult(action="skipped", errors=[f"Failed to fetch server data: {e}"])

    if local is not None and not local.is_empty:
        if snapshots_match(local, server):
            logger.info("Local snapshot matches server data, nothing to do")
            return ReconcileResult(action="unchanged")

        logger.info(
            f"Local snapshot differs from server ({len(local.teams)} vs "
            f"{len(server.teams)} teams), replacing server data"
        )
        errors = await clear_all_data(gateway)
        result = await manager.import_data(local)
        return ReconcileResult(action="replaced", errors=errors + result.errors)

    if seed_defaults and server.is_empty:
        errors = await seed_default_teams(gateway)
        return ReconcileResult(action="seeded", errors=errors)

    logger.info("No local snapshot, keeping server data")
    return ReconcileResult(action="unchanged")
