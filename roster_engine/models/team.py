# roster_engine/models/team.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import SCORE_VECTOR_LENGTH

Roster = List[str]
Pick = str  # Opaque token, e.g. "2025-R1-Protected"
ScoreVector = List[int]


def validate_score_vector(score: ScoreVector) -> ScoreVector:
    """Empty (not applicable) or exactly one non-negative int per category."""
    if len(score) not in (0, SCORE_VECTOR_LENGTH):
        raise ValueError(
            f"score vector must have 0 or {SCORE_VECTOR_LENGTH} entries, got {len(score)}"
        )
    if any(value < 0 for value in score):
        raise ValueError("score vector entries must be non-negative")
    return score


class TeamRecord(BaseModel):
    """One franchise's stored state within a session. Keyed by (session_id, team)."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    team: str
    roster: Roster = []
    picks: List[Pick] = []
    score: ScoreVector = []

    @field_validator("score")
    @classmethod
    def check_score(cls, score: ScoreVector) -> ScoreVector:
        return validate_score_vector(score)

    @property
    def key(self) -> tuple[str, str]:
        return (self.session_id, self.team)


class TeamSnapshot(BaseModel):
    """Lookup response shape: {players, picks, score}."""

    players: Roster = []
    picks: List[Pick] = []
    score: ScoreVector = []

    @field_validator("score")
    @classmethod
    def check_score(cls, score: ScoreVector) -> ScoreVector:
        return validate_score_vector(score)

    @classmethod
    def from_record(cls, record: TeamRecord) -> "TeamSnapshot":
        return cls(
            players=list(record.roster),
            picks=list(record.picks),
            score=list(record.score),
        )
