"""In-process repository backed by dictionaries."""

from typing import Literal

from pydantic import BaseModel

from cricket_pro.repositories.base import Collection, CricketRepository


class MemoryRepository(CricketRepository):
    """Keeps every collection in a dict; nothing survives a restart.

    Reads hand out copies so callers can't mutate stored records in place.
    """

    def __init__(self, team_delete_policy: Literal["reject", "cascade"] = "reject"):
        super().__init__(team_delete_policy)
        self._collections: dict[str, dict[str, BaseModel]] = {
            "teams": {},
            "players": {},
            "matches": {},
        }

    def _load(self, collection: Collection, record_id: str) -> BaseModel | None:
        record = self._collections[collection].get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def _load_all(self, collection: Collection) -> list[BaseModel]:
        return [r.model_copy(deep=True) for r in self._collections[collection].values()]

    def _store(self, collection: Collection, record: BaseModel) -> None:
        self._collections[collection][record.id] = record.model_copy(deep=True)

    def _remove(self, collection: Collection, record_id: str) -> bool:
        return self._collections[collection].pop(record_id, None) is not None
