"""Player models."""

from pydantic import Field

from cricket_pro.models.base import CamelModel, UtcDatetime, utcnow

# Known roles; the data layer stores any string
PLAYER_ROLES = ("batsman", "bowler", "all-rounder", "wicket-keeper")


class Player(CamelModel):
    """A stored player with cumulative career counters."""

    id: str
    name: str
    role: str
    team_id: str | None = None

    # Batting
    matches: int = 0
    runs: int = 0
    balls_faced: int = 0
    fours: int = 0
    sixes: int = 0
    fifties: int = 0
    hundreds: int = 0
    high_score: int = 0

    # Bowling
    wickets: int = 0
    balls_bowled: int = 0
    runs_conceded: int = 0
    maidens: int = 0
    best_bowling: str = "0/0"

    created_at: UtcDatetime = Field(default_factory=utcnow)


class PlayerCreate(CamelModel):
    name: str = Field(min_length=1)
    role: str = Field(min_length=1)
    team_id: str | None = None


class PlayerUpdate(CamelModel):
    name: str | None = None
    role: str | None = None
    team_id: str | None = None
    matches: int | None = None
    runs: int | None = None
    balls_faced: int | None = None
    fours: int | None = None
    sixes: int | None = None
    fifties: int | None = None
    hundreds: int | None = None
    high_score: int | None = None
    wickets: int | None = None
    balls_bowled: int | None = None
    runs_conceded: int | None = None
    maidens: int | None = None
    best_bowling: str | None = None


class PlayerStatsSummary(CamelModel):
    """Derived career figures shown on the player stats page."""

    player_id: str
    name: str
    role: str
    batting_average: float
    strike_rate: float
    bowling_average: float
    economy: float
