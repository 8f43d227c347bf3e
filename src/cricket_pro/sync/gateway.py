"""Uniform async access to teams, players and matches.

The export manager and the startup reconciliation only need list, create,
update and delete per collection. Both the HTTP client and the in-process
repository satisfy this, so the same code restores a snapshot over the
network or directly inside the server.

Records cross this boundary as wire-format (camelCase) dicts.
"""

from typing import Any, Protocol

from cricket_pro.models.match import MatchCreate, MatchUpdate
from cricket_pro.models.player import PlayerCreate, PlayerUpdate
from cricket_pro.models.team import TeamCreate, TeamUpdate
from cricket_pro.repositories.base import CricketRepository

Record = dict[str, Any]


class DataGateway(Protocol):
    async def list_teams(self) -> list[Record]: ...
    async def list_players(self) -> list[Record]: ...
    async def list_matches(self) -> list[Record]: ...

    async def create_team(self, data: Record) -> Record: ...
    async def create_player(self, data: Record) -> Record: ...
    async def create_match(self, data: Record) -> Record: ...

    async def update_team(self, team_id: str, data: Record) -> Record | None: ...
    async def update_player(self, player_id: str, data: Record) -> Record | None: ...
    async def update_match(self, match_id: str, data: Record) -> Record | None: ...

    async def delete_team(self, team_id: str) -> bool: ...
    async def delete_player(self, player_id: str) -> bool: ...
    async def delete_match(self, match_id: str) -> bool: ...


def _wire(record) -> Record | None:
    return record.model_dump(mode="json", by_alias=True) if record is not None else None


class RepositoryGateway:
    """DataGateway over a repository in the same process.

    Input dicts go through the same pydantic models the REST routes use, so
    a bad record raises ``pydantic.ValidationError`` just as the API would
    answer 422.
    """

    def __init__(self, repository: CricketRepository):
        self.repository = repository

    async def list_teams(self) -> list[Record]:
        return [_wire(t) for t in self.repository.list_teams()]

    async def list_players(self) -> list[Record]:
        return [_wire(p) for p in self.repository.list_players()]

    async def list_matches(self) -> list[Record]:
        return [_wire(m) for m in self.repository.list_matches()]

    async def create_team(self, data: Record) -> Record:
        return _wire(self.repository.create_team(TeamCreate.model_validate(data)))

    async def create_player(self, data: Record) -> Record:
        return _wire(self.repository.create_player(PlayerCreate.model_validate(data)))

    async def create_match(self, data: Record) -> Record:
        return _wire(self.repository.create_match(MatchCreate.model_validate(data)))

    async def update_team(self, team_id: str, data: Record) -> Record | None:
        updates = TeamUpdate.model_validate(data).model_dump(exclude_unset=True)
        return _wire(self.repository.update_team(team_id, updates))

    async def update_player(self, player_id: str, data: Record) -> Record | None:
        updates = PlayerUpdate.model_validate(data).model_dump(exclude_unset=True)
        return _wire(self.repository.update_player(player_id, updates))

    async def update_match(self, match_id: str, data: Record) -> Record | None:
        updates = MatchUpdate.model_validate(data).model_dump(exclude_unset=True)
        return _wire(self.repository.update_match(match_id, updates))

    async def delete_team(self, team_id: str) -> bool:
        return self.repository.delete_team(team_id)

    async def delete_player(self, player_id: str) -> bool:
        return self.repository.delete_player(player_id)

    async def delete_match(self, match_id: str) -> bool:
        return self.repository.delete_match(match_id)
