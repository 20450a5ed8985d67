import copy
from typing import Dict, Optional

from loguru import logger

from roster_engine.codec.record_codec import WireRecord
from roster_engine.storage.base import TeamKey, TeamStore


class InMemoryTeamStore(TeamStore):
    """Dict-backed store used for local runs and tests."""

    table_name = "memory"

    def __init__(self, records: Optional[Dict[TeamKey, WireRecord]] = None):
        self._records: Dict[TeamKey, WireRecord] = {}
        for key, record in (records or {}).items():
            self._records[key] = copy.deepcopy(record)

    async def get(self, key: TeamKey) -> Optional[WireRecord]:
        record = self._records.get(key)
        return copy.deepcopy(record) if record is not None else None

    async def put(self, key: TeamKey, record: WireRecord) -> None:
        self._records[key] = copy.deepcopy(record)
        logger.debug(f"Stored record for {key} in memory.")

    async def delete(self, key: TeamKey) -> None:
        self._records.pop(key, None)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records
