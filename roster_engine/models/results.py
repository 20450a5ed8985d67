# roster_engine/models/results.py
from typing import Any, List, Optional

from pydantic import BaseModel, computed_field

from .enums import ResponseStatus
from .team import ScoreVector


class WriteOutcome(BaseModel):
    """Settled result of one store operation within a batch."""

    session_id: str
    team: str
    ok: bool
    error: Optional[str] = None
    error_type: Optional[str] = None  # e.g. "StoreOperationError"


class BatchResult(BaseModel):
    """All outcomes of a fan-out batch, in request order."""

    operation: str
    outcomes: List[WriteOutcome] = []

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> List[WriteOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class TradeOutcome(BaseModel):
    """Both computed score vectors plus the write results that produced them."""

    scores: List[ScoreVector]
    result: BatchResult


class EngineResponse(BaseModel):
    """Structured result returned across the engine boundary."""

    ok: bool
    status: ResponseStatus
    body: Any = None
    error: Optional[str] = None
