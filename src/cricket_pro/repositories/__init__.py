"""Repositories for Cricket Pro data."""

from cricket_pro.repositories.base import CricketRepository, TeamInUseError
from cricket_pro.repositories.duckdb_repository import DuckDBRepository
from cricket_pro.repositories.memory_repository import MemoryRepository

__all__ = [
    "CricketRepository",
    "DuckDBRepository",
    "MemoryRepository",
    "TeamInUseError",
]
