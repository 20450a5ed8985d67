from typing import Sequence

from loguru import logger

from roster_engine.models.results import BatchResult
from roster_engine.services.batch import BatchStoreError, settle_all
from roster_engine.storage.base import TeamStore


class DeletionService:
    """Best-effort concurrent removal of a session's team records."""

    def __init__(self, store: TeamStore):
        self.store = store

    async def delete_teams(self, session_id: str, teams: Sequence[str]) -> BatchResult:
        if not teams:
            logger.debug(f"No teams to delete for session {session_id}.")
            return BatchResult(operation="delete")

        keys = [(session_id, team) for team in teams]
        result = await settle_all(
            "delete", keys, [self.store.delete(key) for key in keys]
        )
        if not result.ok:
            raise BatchStoreError(result)

        logger.info(f"Deleted {len(keys)} team record(s) for session {session_id}.")
        return result
