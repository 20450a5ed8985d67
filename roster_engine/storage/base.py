from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from roster_engine.codec.record_codec import WireRecord

TeamKey = Tuple[str, str]  # (session_id, team)


class StoreOperationError(Exception):
    """Raised for any backing-store failure (network, throttling, validation)."""

    def __init__(self, operation: str, keys: Sequence[TeamKey], message: str):
        super().__init__(f"{operation} failed for {list(keys)}: {message}")
        self.operation = operation
        self.keys = list(keys)
        self.message = message


class NotFoundError(Exception):
    """Raised when no record exists for a (session_id, team) key."""

    def __init__(self, key: TeamKey):
        super().__init__(f"No record for session {key[0]!r}, team {key[1]!r}")
        self.key = key


class TeamStore(ABC):
    """Async key-value store of wire records keyed by (session_id, team)."""

    table_name: str = "roster_data"

    @abstractmethod
    async def get(self, key: TeamKey) -> Optional[WireRecord]:
        """Returns the stored wire record, or None when the key has no record."""
        pass

    @abstractmethod
    async def put(self, key: TeamKey, record: WireRecord) -> None:
        """Stores the record, fully replacing anything under the same key."""
        pass

    @abstractmethod
    async def delete(self, key: TeamKey) -> None:
        """Removes the record. Deleting a missing key is not an error."""
        pass

    async def close(self) -> None:
        """Releases any client resources."""
        return None
