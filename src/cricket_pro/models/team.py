"""Team models."""

from pydantic import Field

from cricket_pro.models.base import CamelModel, UtcDatetime, utcnow


class Team(CamelModel):
    """A stored team.

    ``players`` duplicates ``Player.team_id`` and is maintained by the
    repository when players are created or deleted.
    """

    id: str
    name: str
    short_name: str
    players: list[str] = Field(default_factory=list)
    matches: int = 0
    wins: int = 0
    losses: int = 0
    created_at: UtcDatetime = Field(default_factory=utcnow)


class TeamCreate(CamelModel):
    name: str = Field(min_length=1)
    short_name: str = Field(min_length=1, max_length=5)


class TeamUpdate(CamelModel):
    name: str | None = None
    short_name: str | None = Field(default=None, max_length=5)
    players: list[str] | None = None
    matches: int | None = None
    wins: int | None = None
    losses: int | None = None
