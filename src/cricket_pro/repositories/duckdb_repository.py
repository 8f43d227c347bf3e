"""DuckDB-backed repository for durable storage."""

import logging
from pathlib import Path
from typing import Literal

import duckdb
import pandas as pd
from pydantic import BaseModel

from cricket_pro.repositories.base import COLLECTION_MODELS, Collection, CricketRepository

logger = logging.getLogger(__name__)


class DuckDBRepository(CricketRepository):
    """Stores each record as a JSON document in a per-collection table.

    A connection is opened per operation, so the file is only locked while a
    statement runs.
    """

    def __init__(
        self,
        database_path: str | Path,
        team_delete_policy: Literal["reject", "cascade"] = "reject",
    ):
        """Initialize with path to the DuckDB database file.

        Args:
            database_path: Path to the .duckdb file; created when missing
            team_delete_policy: "reject" or "cascade", see CricketRepository
        """
        super().__init__(team_delete_policy)
        self._db_path = Path(database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._create_tables()

    def _connect(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(str(self._db_path))

    def _create_tables(self) -> None:
        with self._connect() as conn:
            for table in COLLECTION_MODELS:
                conn.execute(f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id VARCHAR PRIMARY KEY,
                        payload VARCHAR NOT NULL,
                        created_at TIMESTAMP NOT NULL
                    )
                """)
            tables = conn.execute("SHOW TABLES").fetchall()
        logger.info(f"DuckDBRepository: Using {self._db_path} ({len(tables)} tables)")

    def _query(self, sql: str, params: list | None = None) -> list[dict]:
        """Execute query and return list of dicts with JSON-friendly values."""
        with self._connect() as conn:
            df = conn.execute(sql, params or []).df()

        for col in df.columns:
            if pd.api.types.is_datetime64_any_dtype(df[col]):
                df[col] = df[col].dt.strftime("%Y-%m-%dT%H:%M:%S")

        return df.to_dict(orient="records")

    def _load(self, collection: Collection, record_id: str) -> BaseModel | None:
        rows = self._query(f"SELECT payload FROM {collection} WHERE id = ?", [record_id])
        if not rows:
            return None
        return COLLECTION_MODELS[collection].model_validate_json(rows[0]["payload"])

    def _load_all(self, collection: Collection) -> list[BaseModel]:
        rows = self._query(f"SELECT payload FROM {collection} ORDER BY created_at, id")
        model = COLLECTION_MODELS[collection]
        return [model.model_validate_json(row["payload"]) for row in rows]

    def _store(self, collection: Collection, record: BaseModel) -> None:
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO {collection} VALUES (?, ?, ?)",
                [record.id, record.model_dump_json(), record.created_at.replace(tzinfo=None)],
            )

    def _remove(self, collection: Collection, record_id: str) -> bool:
        with self._connect() as conn:
            existing = conn.execute(
                f"SELECT COUNT(*) FROM {collection} WHERE id = ?", [record_id]
            ).fetchone()[0]
            if not existing:
                return False
            conn.execute(f"DELETE FROM {collection} WHERE id = ?", [record_id])
        return True
