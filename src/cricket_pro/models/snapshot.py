"""Portable backup snapshot of every team, player and match."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import Field

from cricket_pro.models.base import CamelModel

SNAPSHOT_VERSION = "1.0.0"


class Snapshot(CamelModel):
    """Serialized as ``{teams, players, matches, exportDate, version}``.

    Records are kept as wire-format dicts so that a snapshot written by an
    older client still loads; field-level checks happen per record on import.
    """

    teams: list[dict[str, Any]] = Field(default_factory=list)
    players: list[dict[str, Any]] = Field(default_factory=list)
    matches: list[dict[str, Any]] = Field(default_factory=list)
    export_date: str
    version: str = SNAPSHOT_VERSION

    @property
    def is_empty(self) -> bool:
        return not (self.teams or self.players or self.matches)


@dataclass
class ImportResult:
    """Outcome of restoring a snapshot."""

    success: bool
    errors: list[str] = field(default_factory=list)
    teams_imported: int = 0
    players_imported: int = 0
    matches_imported: int = 0
