import pytest

from roster_engine.codec.record_codec import (
    CURRENT_SCHEMA_VERSION,
    EncodingError,
    decode_team_record,
    encode_team_record,
    encode_value,
)
from roster_engine.models.team import TeamRecord


def _record(**overrides) -> TeamRecord:
    fields = dict(
        session_id="sess-1",
        team="Lakers",
        roster=["p1", "p2", "p2"],
        picks=["2026-R1-Unprotected"],
        score=[10, 8, 6, 4, 2, 1],
    )
    fields.update(overrides)
    return TeamRecord(**fields)


def test_encode_tags_every_value():
    wire = encode_team_record(_record())

    assert wire == {
        "Uuid": {"S": "sess-1"},
        "Team": {"S": "Lakers"},
        "Players": {"L": [{"S": "p1"}, {"S": "p2"}, {"S": "p2"}]},
        "Picks": {"L": [{"S": "2026-R1-Unprotected"}]},
        "Score": {"L": [{"N": "10"}, {"N": "8"}, {"N": "6"}, {"N": "4"}, {"N": "2"}, {"N": "1"}]},
        "SchemaVersion": {"N": str(CURRENT_SCHEMA_VERSION)},
    }


@pytest.mark.parametrize(
    "record",
    [
        _record(),
        _record(roster=[], picks=[], score=[]),
        _record(score=[0, 0, 0, 0, 0, 0]),
    ],
)
def test_round_trip(record):
    wire = encode_team_record(record)

    assert decode_team_record(wire) == record
    assert encode_team_record(decode_team_record(wire)) == wire


def test_empty_score_is_not_zero_score():
    empty = decode_team_record(encode_team_record(_record(score=[])))
    zeros = decode_team_record(encode_team_record(_record(score=[0] * 6)))

    assert empty.score == []
    assert zeros.score == [0] * 6


def test_legacy_record_flattens_pick_triples():
    legacy = {
        "Uuid": {"S": "sess-1"},
        "Team": {"S": "Celtics"},
        "Players": {"L": [{"S": "q1"}]},
        "Picks": {"L": [{"L": [{"N": "2026"}, {"N": "1"}, {"S": "Top10"}]}]},
        "Score": {"N": "310"},
    }

    record = decode_team_record(legacy)

    assert record.picks == ["2026-R1-Top10"]
    assert record.roster == ["q1"]
    assert record.score == []


def test_unknown_schema_version_is_rejected():
    wire = encode_team_record(_record())
    wire["SchemaVersion"] = {"N": "7"}

    with pytest.raises(EncodingError, match="version"):
        decode_team_record(wire)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda w: w.pop("Players"),
        lambda w: w.update(Team={"N": "5"}),
        lambda w: w.update(Score={"L": [{"N": "1"}, {"N": "2"}]}),
        lambda w: w.update(Score={"L": [{"N": "x"}] * 6}),
        # A legacy-shaped pick inside a current-schema record
        lambda w: w.update(Picks={"L": [{"L": [{"N": "2026"}, {"N": "1"}, {"S": "No"}]}]}),
    ],
)
def test_malformed_records_raise_encoding_error(mutate):
    wire = encode_team_record(_record())
    mutate(wire)

    with pytest.raises(EncodingError):
        decode_team_record(wire)


def test_encode_value_rejects_unsupported_types():
    with pytest.raises(EncodingError):
        encode_value(1.5)
    with pytest.raises(EncodingError):
        encode_value(True)
