"""REST endpoints for teams."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from cricket_pro.api.deps import get_repository, require, unprocessable
from cricket_pro.models.match import Match
from cricket_pro.models.player import Player
from cricket_pro.models.team import Team, TeamCreate, TeamUpdate
from cricket_pro.repositories.base import TeamInUseError
from cricket_pro.services.stats_service import team_stats

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("", response_model=list[Team])
def list_teams(request: Request):
    return get_repository(request).list_teams()


@router.post("", response_model=Team, status_code=201)
def create_team(request: Request, body: TeamCreate):
    return get_repository(request).create_team(body)


@router.get("/{team_id}", response_model=Team)
def get_team(request: Request, team_id: str):
    return require(get_repository(request).get_team(team_id), "Team", team_id)


@router.patch("/{team_id}", response_model=Team)
def update_team(request: Request, team_id: str, body: TeamUpdate):
    try:
        team = get_repository(request).update_team(team_id, body.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise unprocessable(e)
    return require(team, "Team", team_id)


@router.delete("/{team_id}")
def delete_team(request: Request, team_id: str):
    """Delete a team; 409 while players or matches still reference it under the reject policy."""
    try:
        deleted = get_repository(request).delete_team(team_id)
    except TeamInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Team not found: {team_id}")
    return {"deleted": True}


@router.get("/{team_id}/players", response_model=list[Player])
def get_team_players(request: Request, team_id: str):
    repo = get_repository(request)
    require(repo.get_team(team_id), "Team", team_id)
    return repo.get_players_by_team(team_id)


@router.get("/{team_id}/matches", response_model=list[Match])
def get_team_matches(request: Request, team_id: str):
    repo = get_repository(request)
    require(repo.get_team(team_id), "Team", team_id)
    return repo.get_matches_by_team(team_id)


@router.get("/{team_id}/stats")
def get_team_stats(request: Request, team_id: str):
    """Played, won and lost, computed from the stored matches."""
    repo = get_repository(request)
    require(repo.get_team(team_id), "Team", team_id)
    return team_stats(team_id, repo.get_matches_by_team(team_id)).to_dict()
