"""
Conversion between TeamRecord and the attribute-tree wire record.

Every value in a wire record is a one-key dict naming its type: ``{"S": str}``
for strings, ``{"N": "<int>"}`` for numbers (carried as decimal strings) and
``{"L": [...]}`` for ordered lists. Records are tagged with ``SchemaVersion``;
records written before the tag existed are schema 1.
"""
from typing import Any, Callable, Dict, List

from loguru import logger
from pydantic import ValidationError

from roster_engine.models.team import TeamRecord
from roster_engine.utils.misc_utils import format_pick_token

WireValue = Dict[str, Any]
WireRecord = Dict[str, WireValue]

CURRENT_SCHEMA_VERSION = 2
LEGACY_SCHEMA_VERSION = 1

UUID_ATTR = "Uuid"
TEAM_ATTR = "Team"
PLAYERS_ATTR = "Players"
PICKS_ATTR = "Picks"
SCORE_ATTR = "Score"
VERSION_ATTR = "SchemaVersion"


class EncodingError(Exception):
    """Raised when a record cannot be converted to or from its wire form."""

    pass


# --- Generic attribute values ---


def encode_value(value: Any) -> WireValue:
    """Tags a str, int or list (recursively) with its wire type."""
    # bool is an int subclass but has no place in a team record
    if isinstance(value, bool):
        raise EncodingError(f"Cannot encode boolean value {value!r}")
    if isinstance(value, str):
        return {"S": value}
    if isinstance(value, int):
        return {"N": str(value)}
    if isinstance(value, (list, tuple)):
        return {"L": [encode_value(item) for item in value]}
    raise EncodingError(f"Cannot encode value of type {type(value).__name__}")


def _expect(value: Any, tag: str, context: str) -> Any:
    if not isinstance(value, dict) or len(value) != 1 or tag not in value:
        raise EncodingError(f"{context}: expected a {tag!r}-typed value, got {value!r}")
    return value[tag]


def decode_string(value: Any, context: str) -> str:
    raw = _expect(value, "S", context)
    if not isinstance(raw, str):
        raise EncodingError(f"{context}: string value is not a str: {raw!r}")
    return raw


def decode_number(value: Any, context: str) -> int:
    raw = _expect(value, "N", context)
    try:
        return int(str(raw))
    except ValueError as e:
        raise EncodingError(f"{context}: not an integer: {raw!r}") from e


def decode_list(value: Any, context: str) -> List[Any]:
    raw = _expect(value, "L", context)
    if not isinstance(raw, list):
        raise EncodingError(f"{context}: list value is not a list: {raw!r}")
    return raw


def _require(wire: WireRecord, attr: str) -> Any:
    if attr not in wire:
        raise EncodingError(f"Wire record is missing attribute {attr!r}")
    return wire[attr]


# --- Team records ---


def encode_team_record(record: TeamRecord) -> WireRecord:
    """Builds the full (current schema) wire record for a team."""
    return {
        UUID_ATTR: encode_value(record.session_id),
        TEAM_ATTR: encode_value(record.team),
        PLAYERS_ATTR: encode_value(list(record.roster)),
        PICKS_ATTR: encode_value(list(record.picks)),
        SCORE_ATTR: encode_value(list(record.score)),
        VERSION_ATTR: encode_value(CURRENT_SCHEMA_VERSION),
    }


def _decode_key_and_players(wire: WireRecord) -> Dict[str, Any]:
    return {
        "session_id": decode_string(_require(wire, UUID_ATTR), UUID_ATTR),
        "team": decode_string(_require(wire, TEAM_ATTR), TEAM_ATTR),
        "roster": [
            decode_string(item, PLAYERS_ATTR)
            for item in decode_list(_require(wire, PLAYERS_ATTR), PLAYERS_ATTR)
        ],
    }


def _decode_v1(wire: WireRecord) -> Dict[str, Any]:
    # Picks were [year, round, protection] triples and score a scalar rating
    fields = _decode_key_and_players(wire)
    picks = []
    for item in decode_list(_require(wire, PICKS_ATTR), PICKS_ATTR):
        triple = decode_list(item, PICKS_ATTR)
        if len(triple) != 3:
            raise EncodingError(f"Legacy pick must have 3 parts, got {len(triple)}")
        year = decode_number(triple[0], "pick year")
        draft_round = decode_number(triple[1], "pick round")
        protection = decode_string(triple[2], "pick protection")
        picks.append(format_pick_token(year, draft_round, protection))
    fields["picks"] = picks

    if SCORE_ATTR in wire:
        legacy_total = decode_number(wire[SCORE_ATTR], SCORE_ATTR)
        logger.debug(
            f"Dropping legacy scalar score {legacy_total} for team {fields['team']}"
        )
    fields["score"] = []
    return fields


def _decode_v2(wire: WireRecord) -> Dict[str, Any]:
    fields = _decode_key_and_players(wire)
    fields["picks"] = [
        decode_string(item, PICKS_ATTR)
        for item in decode_list(_require(wire, PICKS_ATTR), PICKS_ATTR)
    ]
    fields["score"] = [
        decode_number(item, SCORE_ATTR)
        for item in decode_list(_require(wire, SCORE_ATTR), SCORE_ATTR)
    ]
    return fields


DECODERS: Dict[int, Callable[[WireRecord], Dict[str, Any]]] = {
    LEGACY_SCHEMA_VERSION: _decode_v1,
    CURRENT_SCHEMA_VERSION: _decode_v2,
}


def schema_version(wire: WireRecord) -> int:
    if VERSION_ATTR not in wire:
        return LEGACY_SCHEMA_VERSION
    return decode_number(wire[VERSION_ATTR], VERSION_ATTR)


def decode_team_record(wire: WireRecord) -> TeamRecord:
    """Decodes a wire record using the decoder registered for its schema version."""
    if not isinstance(wire, dict):
        raise EncodingError(f"Wire record must be a mapping, got {type(wire).__name__}")

    version = schema_version(wire)
    decoder = DECODERS.get(version)
    if decoder is None:
        raise EncodingError(f"Unsupported wire schema version: {version}")

    fields = decoder(wire)
    try:
        return TeamRecord(**fields)
    except ValidationError as e:
        raise EncodingError(f"Decoded record is invalid: {e}") from e
