# roster_engine/engine.py
from typing import Any, Mapping

from loguru import logger
from pydantic import ValidationError

from roster_engine.calculation.score_calculator import ScoreCalculator, UnknownPlayerError
from roster_engine.codec.record_codec import EncodingError
from roster_engine.config.settings import AppSettings
from roster_engine.models.enums import ResponseStatus
from roster_engine.models.requests import DeleteRequest, LookupRequest, TradeRequest
from roster_engine.models.results import EngineResponse
from roster_engine.reference.static_data import StaticReferenceData, UnknownTeamError
from roster_engine.services.deletion import DeletionService
from roster_engine.services.retrieval import RetrievalService
from roster_engine.services.trade_coordinator import TradeCoordinator
from roster_engine.storage.base import NotFoundError, StoreOperationError, TeamStore
from roster_engine.storage.factory import build_team_store

CLIENT_ERRORS = (ValidationError, UnknownPlayerError, UnknownTeamError)
SERVER_ERRORS = (StoreOperationError, EncodingError)


def _failure(operation: str, error: Exception) -> EngineResponse:
    """Maps an engine exception onto a structured response and logs it."""
    if isinstance(error, NotFoundError):
        return EngineResponse(ok=False, status=ResponseStatus.NOT_FOUND, error=str(error))
    if isinstance(error, CLIENT_ERRORS):
        logger.warning(f"Rejected {operation} request: {error}")
        return EngineResponse(
            ok=False, status=ResponseStatus.CLIENT_ERROR, error=str(error)
        )
    if isinstance(error, SERVER_ERRORS):
        logger.error(f"{operation} failed ({type(error).__name__}): {error}")
    else:
        logger.exception(f"Unexpected error during {operation}: {error}")
    return EngineResponse(ok=False, status=ResponseStatus.SERVER_ERROR, error=str(error))


class RosterEngine:
    """
    Boundary of the trade engine.

    Takes raw request payloads (as decoded from a request body), validates
    them into typed requests and returns an EngineResponse for every call.
    """

    def __init__(
        self,
        store: TeamStore,
        reference: StaticReferenceData,
        calculator: ScoreCalculator,
    ):
        self.store = store
        self.reference = reference
        self.calculator = calculator
        self.coordinator = TradeCoordinator(store, calculator)
        self.retrieval = RetrievalService(store, reference)
        self.deletion = DeletionService(store)

    @classmethod
    async def from_settings(cls, app_settings: AppSettings) -> "RosterEngine":
        reference = StaticReferenceData.load(
            app_settings.data_dir, top_n=app_settings.top_n_players
        )
        store = await build_team_store(app_settings)
        calculator = ScoreCalculator(reference.players, top_n=app_settings.top_n_players)
        return cls(store, reference, calculator)

    async def lookup(self, payload: Mapping[str, Any]) -> EngineResponse:
        """{sessionId, team, mode} -> {players, picks, score}"""
        logger.info(f"Received lookup request: {payload}")
        try:
            request = LookupRequest.model_validate(payload)
            snapshot = await self.retrieval.get_team(
                request.session_id, request.team, request.mode
            )
        except Exception as e:
            return _failure("lookup", e)
        return EngineResponse(
            ok=True, status=ResponseStatus.OK, body=snapshot.model_dump()
        )

    async def trade(self, payload: Mapping[str, Any]) -> EngineResponse:
        """{sessionId, tradeTeams, newRosters, picks} -> [scoreVector, scoreVector]"""
        logger.info(f"Received trade request: {payload}")
        try:
            request = TradeRequest.model_validate(payload)
            outcome = await self.coordinator.execute_trade(request)
        except Exception as e:
            return _failure("trade", e)

        if not outcome.result.ok:
            # Scores are pure computations, so they are returned even on a write fault
            failed = ", ".join(
                f"{f.team} ({f.error_type}: {f.error})" for f in outcome.result.failures
            )
            return EngineResponse(
                ok=False,
                status=ResponseStatus.SERVER_ERROR,
                body=outcome.scores,
                error=f"Trade writes failed for: {failed}",
            )
        return EngineResponse(ok=True, status=ResponseStatus.OK, body=outcome.scores)

    async def delete(self, payload: Mapping[str, Any]) -> EngineResponse:
        """{sessionId, teams[]} -> success or failure, no body"""
        logger.info(f"Received delete request: {payload}")
        try:
            request = DeleteRequest.model_validate(payload)
            await self.deletion.delete_teams(request.session_id, request.teams)
        except Exception as e:
            return _failure("delete", e)
        return EngineResponse(ok=True, status=ResponseStatus.OK)

    async def close(self) -> None:
        await self.store.close()
