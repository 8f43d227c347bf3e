"""REST endpoints for matches and live scoring."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import ValidationError

from cricket_pro.api.deps import get_repository, require, unprocessable
from cricket_pro.models.match import Match, MatchCreate, MatchStatus, MatchUpdate
from cricket_pro.models.scoring import ScoringAction
from cricket_pro.services.scoring_service import ScoringError, ScoringService

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("", response_model=list[Match])
def list_matches(
    request: Request,
    status: Annotated[MatchStatus | None, Query()] = None,
    format: Annotated[str | None, Query()] = None,
):
    """List matches, most recent first, optionally filtered by status or format."""
    matches = get_repository(request).list_matches()
    if status is not None:
        matches = [m for m in matches if m.status == status]
    if format and format.lower() != "all":
        matches = [m for m in matches if m.format.lower() == format.lower()]
    return matches


@router.post("", response_model=Match, status_code=201)
def create_match(request: Request, body: MatchCreate):
    return get_repository(request).create_match(body)


@router.get("/{match_id}", response_model=Match)
def get_match(request: Request, match_id: str):
    return require(get_repository(request).get_match(match_id), "Match", match_id)


@router.patch("/{match_id}", response_model=Match)
def update_match(request: Request, match_id: str, body: MatchUpdate):
    """Merge any subset of fields onto the match (used for manual score edits)."""
    try:
        match = get_repository(request).update_match(
            match_id, body.model_dump(exclude_unset=True)
        )
    except ValidationError as e:
        raise unprocessable(e)
    return require(match, "Match", match_id)


@router.delete("/{match_id}")
def delete_match(request: Request, match_id: str):
    if not get_repository(request).delete_match(match_id):
        raise HTTPException(status_code=404, detail=f"Match not found: {match_id}")
    return {"deleted": True}


@router.post("/{match_id}/start", response_model=Match)
def start_match(request: Request, match_id: str):
    """Start a scheduled match; the toss decides who bats first."""
    service = ScoringService(get_repository(request))
    try:
        match = service.start_match(match_id)
    except ScoringError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return require(match, "Match", match_id)


@router.post("/{match_id}/score", response_model=Match)
def score_match(request: Request, match_id: str, body: ScoringAction):
    """Apply one scoring action to a live match; 400 if its state can't be scored."""
    service = ScoringService(get_repository(request))
    try:
        match = service.score(match_id, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return require(match, "Match", match_id)
