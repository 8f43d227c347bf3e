"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cricket_pro.config import Settings, configure_logging, settings
from cricket_pro.api.routes.dashboard import router as dashboard_router
from cricket_pro.api.routes.matches import router as matches_router
from cricket_pro.api.routes.players import router as players_router
from cricket_pro.api.routes.snapshot import router as snapshot_router
from cricket_pro.api.routes.teams import router as teams_router
from cricket_pro.repositories import CricketRepository, DuckDBRepository, MemoryRepository

logger = logging.getLogger(__name__)


def get_database_path(config: Settings) -> Path:
    """Resolve the DuckDB path; relative paths are taken from the repo root."""
    db_path = Path(config.database_path)
    if db_path.is_absolute():
        return db_path
    repo_root = Path(__file__).parent.parent.parent
    return repo_root / db_path


def build_repository(config: Settings) -> CricketRepository:
    """Create the repository selected by STORAGE_BACKEND."""
    if config.storage_backend == "duckdb":
        return DuckDBRepository(get_database_path(config), config.team_delete_policy)
    logger.info("Using in-memory storage; data is lost on restart")
    return MemoryRepository(config.team_delete_policy)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    configure_logging(settings.log_level)
    # Tests install their own repository before startup
    if not hasattr(app.state, "repository"):
        app.state.repository = build_repository(settings)
    yield


app = FastAPI(
    title="Cricket Pro",
    description="Cricket scorekeeping - teams, players and live match scoring",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "cricket-pro"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Cricket Pro API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(teams_router)
app.include_router(players_router)
app.include_router(matches_router)
app.include_router(snapshot_router)
app.include_router(dashboard_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cricket_pro.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
