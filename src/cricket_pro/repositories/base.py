"""Repository interface shared by every storage backing.

Subclasses only provide four primitives per collection (load one, load all,
store, remove). Record construction, merge semantics and the team delete
policy live here so every backing behaves the same.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Literal, TypeVar

from pydantic import BaseModel

from cricket_pro.models.base import new_id, utcnow
from cricket_pro.models.match import Match, MatchCreate, MatchStatus
from cricket_pro.models.player import Player, PlayerCreate
from cricket_pro.models.team import Team, TeamCreate

logger = logging.getLogger(__name__)

Collection = Literal["teams", "players", "matches"]
RecordT = TypeVar("RecordT", bound=BaseModel)

COLLECTION_MODELS: dict[str, type[BaseModel]] = {
    "teams": Team,
    "players": Player,
    "matches": Match,
}

# Never overwritten by a partial update
IMMUTABLE_FIELDS = ("id", "created_at")


class TeamInUseError(ValueError):
    """Raised when deleting a team that players or matches still reference."""

    def __init__(self, team_id: str, players: int, matches: int):
        self.team_id = team_id
        self.players = players
        self.matches = matches
        super().__init__(
            f"Team {team_id} is referenced by {players} player(s) and {matches} match(es)"
        )


class CricketRepository(ABC):
    """Data access for teams, players and matches."""

    def __init__(self, team_delete_policy: Literal["reject", "cascade"] = "reject"):
        if team_delete_policy not in ("reject", "cascade"):
            raise ValueError(f"Unknown team delete policy: {team_delete_policy}")
        self.team_delete_policy = team_delete_policy

    # Storage primitives

    @abstractmethod
    def _load(self, collection: Collection, record_id: str) -> BaseModel | None:
        """Return the stored record or None."""

    @abstractmethod
    def _load_all(self, collection: Collection) -> list[BaseModel]:
        """Return every record in insertion order."""

    @abstractmethod
    def _store(self, collection: Collection, record: BaseModel) -> None:
        """Insert or replace a record by id."""

    @abstractmethod
    def _remove(self, collection: Collection, record_id: str) -> bool:
        """Delete a record, returning whether it existed."""

    def _merge(self, collection: Collection, record_id: str, updates: dict[str, Any]):
        record = self._load(collection, record_id)
        if record is None:
            return None
        changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
        merged = COLLECTION_MODELS[collection].model_validate(
            {**record.model_dump(), **changes}
        )
        self._store(collection, merged)
        return merged

    # Teams

    def list_teams(self) -> list[Team]:
        return self._load_all("teams")

    def get_team(self, team_id: str) -> Team | None:
        return self._load("teams", team_id)

    def create_team(self, data: TeamCreate) -> Team:
        """Store a new team; counters and roster always start empty."""
        team = Team(id=new_id(), name=data.name, short_name=data.short_name)
        self._store("teams", team)
        return team

    def update_team(self, team_id: str, updates: dict[str, Any]) -> Team | None:
        return self._merge("teams", team_id, updates)

    def delete_team(self, team_id: str) -> bool:
        """Delete a team according to the configured policy.

        With ``reject`` a team still referenced by players or matches is
        left in place and TeamInUseError is raised. With ``cascade`` those
        matches and players are deleted first.
        """
        if self._load("teams", team_id) is None:
            return False

        players = self.get_players_by_team(team_id)
        matches = self.get_matches_by_team(team_id)
        if players or matches:
            if self.team_delete_policy == "reject":
                raise TeamInUseError(team_id, len(players), len(matches))
            for match in matches:
                self._remove("matches", match.id)
            for player in players:
                self._remove("players", player.id)
            logger.info(
                f"Cascade delete of team {team_id}: "
                f"{len(matches)} match(es), {len(players)} player(s)"
            )

        return self._remove("teams", team_id)

    # Players

    def list_players(self) -> list[Player]:
        return self._load_all("players")

    def get_player(self, player_id: str) -> Player | None:
        return self._load("players", player_id)

    def get_players_by_team(self, team_id: str) -> list[Player]:
        return [p for p in self._load_all("players") if p.team_id == team_id]

    def create_player(self, data: PlayerCreate) -> Player:
        """Store a new player with zeroed career counters.

        The new id is appended to the team's roster when the team exists.
        """
        player = Player(id=new_id(), name=data.name, role=data.role, team_id=data.team_id or None)
        self._store("players", player)

        self._add_to_roster(player.team_id, player.id)
        return player

    def update_player(self, player_id: str, updates: dict[str, Any]) -> Player | None:
        """Merge updates; moving the player to another team moves the roster entry too."""
        previous = self._load("players", player_id)
        player = self._merge("players", player_id, updates)
        if player is not None and player.team_id != previous.team_id:
            self._remove_from_roster(previous.team_id, player_id)
            self._add_to_roster(player.team_id, player_id)
        return player

    def delete_player(self, player_id: str) -> bool:
        player = self._load("players", player_id)
        if player is None:
            return False

        self._remove_from_roster(player.team_id, player_id)
        return self._remove("players", player_id)

    def _add_to_roster(self, team_id: str | None, player_id: str) -> None:
        team = self._load("teams", team_id) if team_id else None
        if team is not None and player_id not in team.players:
            team.players = [*team.players, player_id]
            self._store("teams", team)

    def _remove_from_roster(self, team_id: str | None, player_id: str) -> None:
        team = self._load("teams", team_id) if team_id else None
        if team is not None and player_id in team.players:
            team.players = [pid for pid in team.players if pid != player_id]
            self._store("teams", team)

    # Matches

    def list_matches(self) -> list[Match]:
        """All matches, most recent date first."""
        return sorted(self._load_all("matches"), key=lambda m: m.date, reverse=True)

    def get_match(self, match_id: str) -> Match | None:
        return self._load("matches", match_id)

    def get_matches_by_team(self, team_id: str) -> list[Match]:
        return [
            m for m in self._load_all("matches")
            if m.team1_id == team_id or m.team2_id == team_id
        ]

    def create_match(self, data: MatchCreate) -> Match:
        """Store a new match.

        Both innings always start at 0/0 in 0 overs with an empty event log,
        whatever the caller sent.
        """
        match = Match(
            id=new_id(),
            team1_id=data.team1_id,
            team2_id=data.team2_id,
            team1_name=data.team1_name,
            team2_name=data.team2_name,
            format=data.format,
            venue=data.venue or None,
            date=data.date or utcnow(),
            status=MatchStatus.NOT_STARTED,
            toss_winner=data.toss_winner or None,
            toss_decision=data.toss_decision or None,
        )
        self._store("matches", match)
        return match

    def update_match(self, match_id: str, updates: dict[str, Any]) -> Match | None:
        return self._merge("matches", match_id, updates)

    def delete_match(self, match_id: str) -> bool:
        return self._remove("matches", match_id)
