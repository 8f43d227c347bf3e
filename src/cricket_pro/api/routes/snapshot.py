"""Backup export and import endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, Request

from cricket_pro.api.deps import get_repository
from cricket_pro.models.snapshot import Snapshot
from cricket_pro.sync.export_manager import DataExportManager
from cricket_pro.sync.gateway import RepositoryGateway

router = APIRouter(prefix="/api", tags=["snapshot"])


@router.get("/export", response_model=Snapshot)
async def export_snapshot(request: Request):
    """All teams, players and matches as one backup document."""
    manager = DataExportManager(RepositoryGateway(get_repository(request)))
    return await manager.export_data()


@router.post("/import")
async def import_snapshot(
    request: Request,
    data: Annotated[Any, Body()],
    clear: Annotated[bool, Query()] = False,
):
    """Recreate the records of a backup document.

    Returns ``{success, errors, ...}``; individual record failures are
    reported rather than failing the request.
    """
    manager = DataExportManager(RepositoryGateway(get_repository(request)))
    result = await manager.import_data(data, clear_existing=clear)
    return {
        "success": result.success,
        "errors": result.errors,
        "teamsImported": result.teams_imported,
        "playersImported": result.players_imported,
        "matchesImported": result.matches_imported,
    }
