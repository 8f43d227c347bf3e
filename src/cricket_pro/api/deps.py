"""Shared helpers for route handlers."""

from fastapi import HTTPException, Request
from pydantic import ValidationError

from cricket_pro.repositories.base import CricketRepository


def get_repository(request: Request) -> CricketRepository:
    """Repository created in the app lifespan (or set directly by tests)."""
    return request.app.state.repository


def require(record, kind: str, record_id: str):
    """Return the record or raise 404."""
    if record is None:
        raise HTTPException(status_code=404, detail=f"{kind} not found: {record_id}")
    return record


def unprocessable(error: ValidationError) -> HTTPException:
    """422 for a merged record that no longer validates."""
    return HTTPException(
        status_code=422,
        detail=error.errors(include_url=False, include_context=False, include_input=False),
    )
