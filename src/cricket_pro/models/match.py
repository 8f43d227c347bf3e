"""Match models."""

from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, Field, model_validator

from cricket_pro.models.base import CamelModel, UtcDatetime, utcnow
from cricket_pro.models.events import BallEvent
from cricket_pro.utils.overs import overs_to_balls


def _valid_overs(value: float) -> float:
    # Raises ValueError for a ball digit outside 0..5, e.g. 3.7
    overs_to_balls(value)
    return value


# O.B notation, see utils.overs
Overs = Annotated[float, Field(ge=0), AfterValidator(_valid_overs)]


class MatchStatus(str, Enum):
    """Lifecycle of a match."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class PlayerMatchStats(CamelModel):
    """One player's figures within a single match."""

    runs: int = 0
    balls_faced: int = 0
    fours: int = 0
    sixes: int = 0
    out: bool = False
    dismissal: str | None = None
    balls_bowled: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    maidens: int = 0


class Match(CamelModel):
    """A stored match with both innings' scores and the event log."""

    id: str
    team1_id: str
    team2_id: str
    team1_name: str
    team2_name: str
    format: str  # T20, ODI, Test
    venue: str | None = None
    date: UtcDatetime = Field(default_factory=utcnow)
    status: MatchStatus = MatchStatus.NOT_STARTED
    toss_winner: str | None = None
    toss_decision: str | None = None  # bat, bowl

    team1_score: int = 0
    team1_wickets: int = 0
    team1_overs: Overs = 0.0
    team2_score: int = 0
    team2_wickets: int = 0
    team2_overs: Overs = 0.0

    winner: str | None = None
    result: str | None = None
    current_innings: int = 1
    batting_team: str | None = None
    bowling_team: str | None = None
    current_batsman1: str | None = None
    current_batsman2: str | None = None
    current_bowler: str | None = None
    on_strike: str | None = None

    ball_by_ball: list[BallEvent] = Field(default_factory=list)
    player_stats: dict[str, PlayerMatchStats] = Field(default_factory=dict)
    created_at: UtcDatetime = Field(default_factory=utcnow)

    def team_name(self, team_id: str | None) -> str | None:
        if team_id == self.team1_id:
            return self.team1_name
        if team_id == self.team2_id:
            return self.team2_name
        return None


class MatchCreate(CamelModel):
    team1_id: str = Field(min_length=1)
    team2_id: str = Field(min_length=1)
    team1_name: str
    team2_name: str
    format: str = Field(min_length=1)
    venue: str | None = None
    date: UtcDatetime | None = None
    toss_winner: str | None = None
    toss_decision: str | None = None

    @model_validator(mode="after")
    def _teams_differ(self) -> "MatchCreate":
        if self.team1_id == self.team2_id:
            raise ValueError("Please select different teams")
        return self


class MatchUpdate(CamelModel):
    """Partial update; any subset of fields may be sent."""

    team1_id: str | None = None
    team2_id: str | None = None
    team1_name: str | None = None
    team2_name: str | None = None
    format: str | None = None
    venue: str | None = None
    date: UtcDatetime | None = None
    status: MatchStatus | None = None
    toss_winner: str | None = None
    toss_decision: str | None = None
    team1_score: int | None = None
    team1_wickets: int | None = None
    team1_overs: Overs | None = None
    team2_score: int | None = None
    team2_wickets: int | None = None
    team2_overs: Overs | None = None
    winner: str | None = None
    result: str | None = None
    current_innings: int | None = None
    batting_team: str | None = None
    bowling_team: str | None = None
    current_batsman1: str | None = None
    current_batsman2: str | None = None
    current_bowler: str | None = None
    on_strike: str | None = None
    ball_by_ball: list[BallEvent] | None = None
    player_stats: dict[str, PlayerMatchStats] | None = None
