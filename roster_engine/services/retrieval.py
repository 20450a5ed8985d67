from loguru import logger

from roster_engine.codec.record_codec import EncodingError, decode_team_record
from roster_engine.models.enums import LookupMode
from roster_engine.models.team import TeamSnapshot
from roster_engine.reference.static_data import StaticReferenceData
from roster_engine.storage.base import NotFoundError, TeamStore


class RetrievalService:
    """Looks up a team's snapshot from the store or from seeded reference data."""

    def __init__(self, store: TeamStore, reference: StaticReferenceData):
        self.store = store
        self.reference = reference

    async def get_team(
        self, session_id: str, team: str, mode: LookupMode = LookupMode.STORE
    ) -> TeamSnapshot:
        if mode == LookupMode.STATIC_FALLBACK:
            # Seeds are shared by every session
            return self.reference.seed_snapshot(team)

        key = (session_id, team)
        wire = await self.store.get(key)
        if wire is None:
            logger.info(f"No stored record for session {session_id}, team {team}.")
            raise NotFoundError(key)

        try:
            record = decode_team_record(wire)
        except EncodingError as e:
            logger.error(f"Failed to decode record for {key}: {e}")
            raise
        return TeamSnapshot.from_record(record)
