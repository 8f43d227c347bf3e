"""REST endpoints for players."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import ValidationError

from cricket_pro.api.deps import get_repository, require, unprocessable
from cricket_pro.models.player import Player, PlayerCreate, PlayerStatsSummary, PlayerUpdate
from cricket_pro.services.stats_service import player_summary

router = APIRouter(prefix="/api/players", tags=["players"])


@router.get("", response_model=list[Player])
def list_players(
    request: Request,
    role: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
):
    """List players, optionally filtered by role and a case-insensitive name search."""
    players = get_repository(request).list_players()
    if role and role.lower() != "all":
        players = [p for p in players if p.role.lower() == role.lower()]
    if search:
        players = [p for p in players if search.lower() in p.name.lower()]
    return players


@router.post("", response_model=Player, status_code=201)
def create_player(request: Request, body: PlayerCreate):
    return get_repository(request).create_player(body)


@router.get("/{player_id}", response_model=Player)
def get_player(request: Request, player_id: str):
    return require(get_repository(request).get_player(player_id), "Player", player_id)


@router.get("/{player_id}/stats", response_model=PlayerStatsSummary)
def get_player_stats(request: Request, player_id: str):
    player = require(get_repository(request).get_player(player_id), "Player", player_id)
    return player_summary(player)


@router.patch("/{player_id}", response_model=Player)
def update_player(request: Request, player_id: str, body: PlayerUpdate):
    try:
        player = get_repository(request).update_player(
            player_id, body.model_dump(exclude_unset=True)
        )
    except ValidationError as e:
        raise unprocessable(e)
    return require(player, "Player", player_id)


@router.delete("/{player_id}")
def delete_player(request: Request, player_id: str):
    if not get_repository(request).delete_player(player_id):
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return {"deleted": True}
