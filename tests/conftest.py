import asyncio
from typing import Dict, List, Optional, Set

import pytest

from roster_engine.calculation.score_calculator import ScoreCalculator
from roster_engine.codec.record_codec import WireRecord
from roster_engine.models.player import PlayerAttributes
from roster_engine.reference.static_data import StaticReferenceData
from roster_engine.storage.base import StoreOperationError, TeamKey
from roster_engine.storage.memory_store import InMemoryTeamStore


def make_player(overall: int, *categories: int, name: Optional[str] = None) -> PlayerAttributes:
    inside, outside, athleticism, playmaking, rebounding, defending = categories
    return PlayerAttributes(
        overall=overall,
        insideScoring=inside,
        outsideScoring=outside,
        athleticism=athleticism,
        playmaking=playmaking,
        rebounding=rebounding,
        defending=defending,
        name=name,
    )


def _league_players() -> Dict[str, PlayerAttributes]:
    players = {}
    # p1..p9: overall 90 down to 82, p9 has outsized ratings that must never count
    for i in range(1, 9):
        players[f"p{i}"] = make_player(91 - i, 80, 70, 60, 50, 40, 30)
    players["p9"] = make_player(50, 99, 99, 99, 99, 99, 99)
    # q1..q6: a six-man roster
    for i in range(1, 7):
        players[f"q{i}"] = make_player(80 - i, 60 + i, 50, 40, 30, 20, 10 + i)
    return players


@pytest.fixture
def players() -> Dict[str, PlayerAttributes]:
    return _league_players()


@pytest.fixture
def calculator(players) -> ScoreCalculator:
    return ScoreCalculator(players)


@pytest.fixture
def reference(players) -> StaticReferenceData:
    return StaticReferenceData.from_dicts(
        {"playerData": {pid: p.model_dump(by_alias=True) for pid, p in players.items()}},
        {
            "teams": {
                "Lakers": {"players": [f"p{i}" for i in range(1, 10)], "picks": ["2026-R1-Unprotected"]},
                "Celtics": {
                    "players": [f"q{i}" for i in range(1, 7)],
                    "picks": [],
                    "score": [1, 2, 3, 4, 5, 6],
                },
            }
        },
    )


class RecordingStore(InMemoryTeamStore):
    """In-memory store that records every call and can fail chosen keys."""

    def __init__(self, fail_keys: Optional[Set[TeamKey]] = None):
        super().__init__()
        self.calls: List[tuple] = []
        self.fail_keys = set(fail_keys or ())

    def _maybe_fail(self, operation: str, key: TeamKey) -> None:
        if key in self.fail_keys:
            raise StoreOperationError(operation, [key], "simulated store fault")

    async def get(self, key: TeamKey) -> Optional[WireRecord]:
        self.calls.append(("get", key))
        self._maybe_fail("get", key)
        return await super().get(key)

    async def put(self, key: TeamKey, record: WireRecord) -> None:
        self.calls.append(("put", key))
        self._maybe_fail("put", key)
        await super().put(key, record)

    async def delete(self, key: TeamKey) -> None:
        self.calls.append(("delete", key))
        self._maybe_fail("delete", key)
        await super().delete(key)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


class OverlapStore(InMemoryTeamStore):
    """Holds every put/delete until ``expected`` calls are in flight at once.

    Calls awaited one after another never reach the threshold and time out.
    """

    def __init__(self, expected: int = 2, timeout: float = 1.0):
        super().__init__()
        self.expected = expected
        self.timeout = timeout
        self.started = 0
        self.max_in_flight = 0
        self._in_flight = 0
        self._all_started = asyncio.Event()

    async def _overlap(self) -> None:
        self.started += 1
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        if self.started >= self.expected:
            self._all_started.set()
        try:
            await asyncio.wait_for(self._all_started.wait(), self.timeout)
        finally:
            self._in_flight -= 1

    async def put(self, key: TeamKey, record: WireRecord) -> None:
        await self._overlap()
        await super().put(key, record)

    async def delete(self, key: TeamKey) -> None:
        await self._overlap()
        await super().delete(key)
