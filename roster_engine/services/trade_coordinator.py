from typing import List

from loguru import logger

from roster_engine.calculation.score_calculator import ScoreCalculator
from roster_engine.codec.record_codec import encode_team_record
from roster_engine.models.requests import TradeRequest
from roster_engine.models.results import TradeOutcome
from roster_engine.models.team import TeamRecord
from roster_engine.services.batch import settle_all
from roster_engine.storage.base import TeamStore


class TradeCoordinator:
    """Writes both sides of a trade with their recomputed scores."""

    def __init__(self, store: TeamStore, calculator: ScoreCalculator):
        self.store = store
        self.calculator = calculator

    def build_records(self, request: TradeRequest) -> List[TeamRecord]:
        """Post-trade record for each participant, scored from its own roster."""
        records = []
        for team, roster, picks in zip(
            request.trade_teams, request.new_rosters, request.picks
        ):
            records.append(
                TeamRecord(
                    session_id=request.session_id,
                    team=team,
                    roster=list(roster),
                    picks=list(picks),
                    score=self.calculator.compute_score(roster),
                )
            )
        return records

    async def _write(self, record: TeamRecord) -> None:
        await self.store.put(record.key, encode_team_record(record))

    async def execute_trade(self, request: TradeRequest) -> TradeOutcome:
        """
        Scores both teams, then issues both full-record writes concurrently.

        There is no cross-record atomicity: one side can be written while the
        other fails. Scores are returned regardless of write outcome.
        """
        # UnknownPlayerError surfaces here, before any write is issued
        records = self.build_records(request)
        scores = [record.score for record in records]

        result = await settle_all(
            "put",
            [record.key for record in records],
            [self._write(record) for record in records],
        )

        if result.ok:
            logger.success(
                f"Trade stored for session {request.session_id}: "
                f"{request.trade_teams[0]} {scores[0]}, {request.trade_teams[1]} {scores[1]}"
            )
        else:
            failed = [outcome.team for outcome in result.failures]
            logger.error(
                f"Trade for session {request.session_id} partially failed; "
                f"not written: {failed}"
            )
        return TradeOutcome(scores=scores, result=result)
