"""Export and import of full data snapshots.

A snapshot holds every team, player and match. Importing creates fresh
records, so every stored identifier changes; team and player references
inside the snapshot are rewritten to the new identifiers as records are
recreated.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from cricket_pro.models.snapshot import SNAPSHOT_VERSION, ImportResult, Snapshot
from cricket_pro.sync.gateway import DataGateway, Record
from cricket_pro.sync.local_store import BACKUP_KEY, LocalStore

logger = logging.getLogger(__name__)

# Assigned by the server on create
STRIPPED_FIELDS = ("id", "createdAt")

# Fields the create endpoints reset; restored with a follow-up update
TEAM_STATE_FIELDS = ("matches", "wins", "losses")
PLAYER_STATE_FIELDS = (
    "matches", "runs", "ballsFaced", "fours", "sixes", "fifties", "hundreds",
    "highScore", "wickets", "ballsBowled", "runsConceded", "maidens", "bestBowling",
)
MATCH_STATE_FIELDS = (
    "status", "team1Score", "team1Wickets", "team1Overs", "team2Score",
    "team2Wickets", "team2Overs", "winner", "result", "currentInnings",
    "battingTeam", "bowlingTeam", "currentBatsman1", "currentBatsman2",
    "currentBowler", "onStrike", "ballByBall", "playerStats",
)
MATCH_TEAM_REFS = ("winner", "tossWinner", "battingTeam", "bowlingTeam")
MATCH_PLAYER_REFS = ("currentBatsman1", "currentBatsman2", "currentBowler", "onStrike")

# Failures of a single record; anything else propagates
RECORD_ERRORS = (
    httpx.HTTPError, ValidationError, ValueError, KeyError, TypeError, AttributeError,
)


class SnapshotFormatError(ValueError):
    """Raised when an import file is not a readable snapshot."""


def _strip(record: Record) -> Record:
    return {k: v for k, v in record.items() if k not in STRIPPED_FIELDS}


def _pick(record: Record, fields: tuple[str, ...]) -> Record:
    return {k: record[k] for k in fields if k in record}


def default_backup_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"cricket-pro-backup-{now.date().isoformat()}.json"


async def clear_all_data(gateway: DataGateway) -> list[str]:
    """Delete every match, then every player, then every team.

    Deleting in dependency order means no team is ever removed while
    something still references it. Failures are logged and collected;
    the sweep carries on.

    Returns:
        Error messages for records that could not be deleted
    """
    errors: list[str] = []
    steps = (
        ("match", gateway.list_matches, gateway.delete_match),
        ("player", gateway.list_players, gateway.delete_player),
        ("team", gateway.list_teams, gateway.delete_team),
    )
    for kind, list_records, delete_record in steps:
        try:
            records = await list_records()
        except httpx.HTTPError as e:
            logger.error(f"Failed to list {kind}s for deletion: {e}")
            errors.append(f"Failed to list {kind}s: {e}")
            continue
        for record in records:
            try:
                await delete_record(record["id"])
            except RECORD_ERRORS as e:
                logger.error(f"Failed to delete {kind} {record.get('id')}: {e}")
                errors.append(f"Failed to delete {kind}: {record.get('id')}")
    return errors


class DataExportManager:
    """Produces snapshots from a gateway and restores them into one."""

    def __init__(self, gateway: DataGateway, store: LocalStore | None = None):
        self.gateway = gateway
        self.store = store

    async def export_data(self) -> Snapshot:
        """Fetch all three collections concurrently and bundle them.

        Raises:
            httpx.HTTPError: If any collection can't be fetched
        """
        teams, players, matches = await asyncio.gather(
            self.gateway.list_teams(),
            self.gateway.list_players(),
            self.gateway.list_matches(),
        )
        return Snapshot(
            teams=teams,
            players=players,
            matches=matches,
            export_date=datetime.now(timezone.utc).isoformat(),
            version=SNAPSHOT_VERSION,
        )

    def download_data_as_file(
        self, snapshot: Snapshot, path: str | Path | None = None
    ) -> Path:
        """Write the snapshot as indented JSON and return the file path.

        A directory (or no path) gets the dated default backup filename.
        """
        target = Path(path) if path else Path.cwd()
        if target.is_dir():
            target = target / default_backup_filename()
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(snapshot.model_dump(by_alias=True), f, indent=2)
        logger.info(f"Snapshot written to {target}")
        return target

    def save_to_local_storage(self, snapshot: Snapshot) -> bool:
        if self.store is None:
            return False
        try:
            self.store.set_item(BACKUP_KEY, snapshot.model_dump_json(by_alias=True))
        except OSError as e:
            logger.error(f"Failed to save to local storage: {e}")
            return False
        return True

    def load_from_local_storage(self) -> Snapshot | None:
        if self.store is None:
            return None
        raw = self.store.get_item(BACKUP_KEY)
        if not raw:
            return None
        try:
            return Snapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Failed to load from local storage: {e}")
            return None

    @staticmethod
    def parse_import_file(path: str | Path) -> dict[str, Any]:
        """Read a backup file.

        Raises:
            SnapshotFormatError: If the file can't be read or isn't JSON
        """
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotFormatError("Invalid JSON file") from e
        except OSError as e:
            raise SnapshotFormatError("Failed to read file") from e

    async def import_data(
        self, data: Snapshot | dict[str, Any], clear_existing: bool = False
    ) -> ImportResult:
        """Recreate every record of a snapshot.

        Only the presence of the ``teams``, ``players`` and ``matches`` keys
        is checked up front; each record is validated as it is created and
        a failing record is reported without stopping the rest.

        Args:
            data: Snapshot or its decoded JSON
            clear_existing: Delete all existing data first

        Returns:
            ImportResult; ``success`` only when no record failed
        """
        if isinstance(data, Snapshot):
            data = data.model_dump(by_alias=True)
        if not isinstance(data, dict) or any(
            not isinstance(data.get(key), list) for key in ("teams", "players", "matches")
        ):
            return ImportResult(success=False, errors=["Import failed: Invalid data format"])

        result = ImportResult(success=False)
        if clear_existing:
            result.errors.extend(await clear_all_data(self.gateway))

        team_ids = await self._import_teams(data["teams"], result)
        player_ids = await self._import_players(data["players"], team_ids, result)
        await self._import_matches(data["matches"], team_ids, player_ids, result)

        result.success = not result.errors
        logger.info(
            f"Import finished: {result.teams_imported} teams, {result.players_imported} players, "
            f"{result.matches_imported} matches, {len(result.errors)} error(s)"
        )
        return result

    async def _restore_state(self, update, new_id: str, state: Record, label: str, result) -> None:
        if not state:
            return
        try:
            restored = await update(new_id, state)
        except RECORD_ERRORS as e:
            logger.warning(f"Failed to restore state of {label}: {e}")
            restored = None
        if restored is None:
            result.errors.append(f"Failed to restore state of {label}")

    async def _import_teams(self, teams: list[Record], result: ImportResult) -> dict[str, str]:
        team_ids: dict[str, str] = {}
        for team in teams:
            name = team.get("name") if isinstance(team, dict) else None
            try:
                payload = _strip(team)
                created = await self.gateway.create_team(payload)
                if created is None:
                    raise ValueError("no record returned")
            except RECORD_ERRORS as e:
                logger.warning(f"Failed to import team {name}: {e}")
                result.errors.append(f"Failed to import team: {name}")
                continue

            if team.get("id"):
                team_ids[team["id"]] = created["id"]
            result.teams_imported += 1
            await self._restore_state(
                self.gateway.update_team, created["id"],
                _pick(payload, TEAM_STATE_FIELDS), f"team {name}", result,
            )
        return team_ids

    async def _import_players(
        self, players: list[Record], team_ids: dict[str, str], result: ImportResult
    ) -> dict[str, str]:
        player_ids: dict[str, str] = {}
        for player in players:
            name = player.get("name") if isinstance(player, dict) else None
            try:
                payload = _strip(player)
                old_team = payload.get("teamId")
                if old_team:
                    payload["teamId"] = team_ids.get(old_team)
                    if payload["teamId"] is None:
                        result.errors.append(
                            f"Player {name} references unknown team {old_team}; imported without a team"
                        )
                created = await self.gateway.create_player(payload)
                if created is None:
                    raise ValueError("no record returned")
            except RECORD_ERRORS as e:
                logger.warning(f"Failed to import player {name}: {e}")
                result.errors.append(f"Failed to import player: {name}")
                continue

            if player.get("id"):
                player_ids[player["id"]] = created["id"]
            result.players_imported += 1
            await self._restore_state(
                self.gateway.update_player, created["id"],
                _pick(payload, PLAYER_STATE_FIELDS), f"player {name}", result,
            )
        return player_ids

    async def _import_matches(
        self,
        matches: list[Record],
        team_ids: dict[str, str],
        player_ids: dict[str, str],
        result: ImportResult,
    ) -> None:
        for match in matches:
            label = (
                f"{match.get('team1Name')} and {match.get('team2Name')}"
                if isinstance(match, dict) else "unknown teams"
            )
            try:
                payload = _remap_match(_strip(match), team_ids, player_ids)
                created = await self.gateway.create_match(payload)
                if created is None:
                    raise ValueError("no record returned")
            except RECORD_ERRORS as e:
                logger.warning(f"Failed to import match between {label}: {e}")
                result.errors.append(f"Failed to import match between {label}")
                continue

            result.matches_imported += 1
            await self._restore_state(
                self.gateway.update_match, created["id"],
                _pick(payload, MATCH_STATE_FIELDS), f"match between {label}", result,
            )


def _remap_match(
    match: Record, team_ids: dict[str, str], player_ids: dict[str, str]
) -> Record:
    """Rewrite team and player references to their newly created ids.

    Raises:
        KeyError: If team1Id or team2Id has no counterpart in the import
    """
    for key in ("team1Id", "team2Id"):
        old = match.get(key)
        if old not in team_ids:
            raise KeyError(f"{key} {old} is not among the imported teams")
        match[key] = team_ids[old]

    for key in MATCH_TEAM_REFS:
        if match.get(key):
            match[key] = team_ids.get(match[key])
    for key in MATCH_PLAYER_REFS:
        if match.get(key):
            match[key] = player_ids.get(match[key])

    if isinstance(match.get("playerStats"), dict):
        match["playerStats"] = {
            player_ids[old]: stats
            for old, stats in match["playerStats"].items()
            if old in player_ids
        }

    if isinstance(match.get("ballByBall"), list):
        events = []
        for event in match["ballByBall"]:
            event = dict(event)
            if event.get("battingTeam"):
                event["battingTeam"] = team_ids.get(event["battingTeam"])
            for key in ("batsmanId", "bowlerId"):
                if event.get(key):
                    event[key] = player_ids.get(event[key])
            events.append(event)
        match["ballByBall"] = events
    return match
