import pytest

from roster_engine.calculation.score_calculator import UnknownPlayerError
from roster_engine.codec.record_codec import decode_team_record
from roster_engine.models.requests import TradeRequest
from roster_engine.services.trade_coordinator import TradeCoordinator
from tests.conftest import OverlapStore, RecordingStore

LAKERS_SCORE = [80, 70, 60, 50, 40, 30]
CELTICS_SCORE = [63, 50, 40, 30, 20, 13]


def _request(**overrides) -> TradeRequest:
    payload = {
        "sessionId": "sess-1",
        "tradeTeams": ["Lakers", "Celtics"],
        "newRosters": [[f"p{i}" for i in range(1, 10)], [f"q{i}" for i in range(1, 7)]],
        "picks": [["2026-R1-Unprotected"], ["2027-R2-Top5", "2028-R1-Unprotected"]],
    }
    payload.update(overrides)
    return TradeRequest.model_validate(payload)


@pytest.mark.asyncio
async def test_trade_scores_each_side_from_its_own_roster(store, calculator):
    coordinator = TradeCoordinator(store, calculator)

    outcome = await coordinator.execute_trade(_request())

    assert outcome.scores == [LAKERS_SCORE, CELTICS_SCORE]
    assert outcome.result.ok
    assert sorted(call for call in store.calls) == [
        ("put", ("sess-1", "Celtics")),
        ("put", ("sess-1", "Lakers")),
    ]


@pytest.mark.asyncio
async def test_trade_writes_full_records(store, calculator):
    coordinator = TradeCoordinator(store, calculator)
    await coordinator.execute_trade(_request())

    lakers = decode_team_record(await store.get(("sess-1", "Lakers")))
    celtics = decode_team_record(await store.get(("sess-1", "Celtics")))

    assert lakers.roster == [f"p{i}" for i in range(1, 10)]
    assert lakers.picks == ["2026-R1-Unprotected"]
    assert lakers.score == LAKERS_SCORE
    assert celtics.picks == ["2027-R2-Top5", "2028-R1-Unprotected"]
    assert celtics.score == CELTICS_SCORE


@pytest.mark.asyncio
async def test_second_trade_replaces_rather_than_merges(store, calculator):
    coordinator = TradeCoordinator(store, calculator)
    await coordinator.execute_trade(_request())
    await coordinator.execute_trade(
        _request(newRosters=[["p1"], ["q1", "q2"]], picks=[[], []])
    )

    lakers = decode_team_record(await store.get(("sess-1", "Lakers")))
    assert lakers.roster == ["p1"]
    assert lakers.picks == []
    assert lakers.score == [80, 70, 60, 50, 40, 30]


@pytest.mark.asyncio
async def test_one_failed_write_still_returns_both_scores(calculator):
    store = RecordingStore(fail_keys={("sess-1", "Celtics")})
    coordinator = TradeCoordinator(store, calculator)

    outcome = await coordinator.execute_trade(_request())

    assert outcome.scores == [LAKERS_SCORE, CELTICS_SCORE]
    assert not outcome.result.ok
    failures = outcome.result.failures
    assert [f.team for f in failures] == ["Celtics"]
    assert failures[0].error_type == "StoreOperationError"
    # No rollback: the Lakers write stands
    assert ("sess-1", "Lakers") in store
    assert ("sess-1", "Celtics") not in store


@pytest.mark.asyncio
async def test_unknown_player_aborts_before_any_write(store, calculator):
    coordinator = TradeCoordinator(store, calculator)

    with pytest.raises(UnknownPlayerError):
        await coordinator.execute_trade(_request(newRosters=[["p1"], ["ghost"]]))

    assert store.calls == []


@pytest.mark.asyncio
async def test_both_writes_are_in_flight_together(calculator):
    store = OverlapStore(expected=2)
    coordinator = TradeCoordinator(store, calculator)

    outcome = await coordinator.execute_trade(_request())

    assert outcome.result.ok
    assert store.max_in_flight == 2
    assert ("sess-1", "Lakers") in store and ("sess-1", "Celtics") in store
