"""Data models for Cricket Pro."""

from cricket_pro.models.events import BallEvent, ExtraEvent, ExtraType, RunEvent, WicketEvent
from cricket_pro.models.match import (
    Match,
    MatchCreate,
    MatchStatus,
    MatchUpdate,
    PlayerMatchStats,
)
from cricket_pro.models.player import Player, PlayerCreate, PlayerStatsSummary, PlayerUpdate
from cricket_pro.models.scoring import ScoringAction
from cricket_pro.models.snapshot import ImportResult, Snapshot
from cricket_pro.models.team import Team, TeamCreate, TeamUpdate

__all__ = [
    "BallEvent",
    "ExtraEvent",
    "ExtraType",
    "RunEvent",
    "WicketEvent",
    "Match",
    "MatchCreate",
    "MatchStatus",
    "MatchUpdate",
    "PlayerMatchStats",
    "Player",
    "PlayerCreate",
    "PlayerStatsSummary",
    "PlayerUpdate",
    "ScoringAction",
    "ImportResult",
    "Snapshot",
    "Team",
    "TeamCreate",
    "TeamUpdate",
]
