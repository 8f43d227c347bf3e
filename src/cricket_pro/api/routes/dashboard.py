"""Dashboard summary endpoint."""

from fastapi import APIRouter, Request

from cricket_pro.api.deps import get_repository
from cricket_pro.services.stats_service import dashboard_summary

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
def get_dashboard(request: Request):
    """Totals, the live match and the latest results."""
    repo = get_repository(request)
    return dashboard_summary(repo.list_teams(), repo.list_players(), repo.list_matches())
