import asyncio
from typing import Awaitable, List, Sequence

from loguru import logger

from roster_engine.models.results import BatchResult, WriteOutcome
from roster_engine.storage.base import StoreOperationError, TeamKey


async def settle_all(
    operation: str, keys: Sequence[TeamKey], calls: Sequence[Awaitable[None]]
) -> BatchResult:
    """
    Runs one store call per key concurrently and waits for every one to settle.

    Failures never cancel or roll back their siblings; each is logged with its
    key and recorded in the returned BatchResult.
    """
    results = await asyncio.gather(*calls, return_exceptions=True)

    outcomes: List[WriteOutcome] = []
    for (session_id, team), result in zip(keys, results):
        if isinstance(result, BaseException):
            if isinstance(result, StoreOperationError):
                message = result.message
            else:
                message = str(result) or type(result).__name__
            logger.error(
                f"{operation} failed for session {session_id}, team {team}: {message}"
            )
            outcomes.append(
                WriteOutcome(
                    session_id=session_id,
                    team=team,
                    ok=False,
                    error=message,
                    error_type=type(result).__name__,
                )
            )
        else:
            outcomes.append(WriteOutcome(session_id=session_id, team=team, ok=True))

    return BatchResult(operation=operation, outcomes=outcomes)


class BatchStoreError(StoreOperationError):
    """StoreOperationError for a batch, carrying every settled outcome."""

    def __init__(self, result: BatchResult):
        failures = result.failures
        super().__init__(
            result.operation,
            [(f.session_id, f.team) for f in failures],
            "; ".join(f"{f.team}: {f.error}" for f in failures),
        )
        self.result = result
