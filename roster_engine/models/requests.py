# roster_engine/models/requests.py
from typing import Annotated, List

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)

from .enums import LookupMode
from .team import Pick, Roster
from roster_engine.utils.misc_utils import canonical_team_key

TeamName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
SessionId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Both camelCase names and the older PascalCase body keys are accepted
_REQUEST_CONFIG = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class LookupRequest(BaseModel):
    model_config = _REQUEST_CONFIG

    session_id: SessionId = Field(
        ..., validation_alias=AliasChoices("sessionId", "Uuid", "session_id")
    )
    team: TeamName = Field(..., validation_alias=AliasChoices("team", "Team"))
    mode: LookupMode = Field(
        LookupMode.STORE, validation_alias=AliasChoices("mode", "Mode")
    )


class TradeRequest(BaseModel):
    """Two-party trade. All three lists are index-aligned and of length 2."""

    model_config = _REQUEST_CONFIG

    session_id: SessionId = Field(
        ..., validation_alias=AliasChoices("sessionId", "Uuid", "session_id")
    )
    trade_teams: List[TeamName] = Field(
        ...,
        min_length=2,
        max_length=2,
        validation_alias=AliasChoices("tradeTeams", "TradeTeams", "trade_teams"),
    )
    new_rosters: List[Roster] = Field(
        ...,
        min_length=2,
        max_length=2,
        validation_alias=AliasChoices("newRosters", "NewRosters", "new_rosters"),
    )
    picks: List[List[Pick]] = Field(
        ...,
        min_length=2,
        max_length=2,
        validation_alias=AliasChoices("picks", "Picks"),
    )

    @model_validator(mode="after")
    def _distinct_teams(self) -> "TradeRequest":
        # Franchise names match case- and whitespace-insensitively
        if canonical_team_key(self.trade_teams[0]) == canonical_team_key(self.trade_teams[1]):
            raise ValueError(f"a team cannot trade with itself: {self.trade_teams[0]}")
        return self


class DeleteRequest(BaseModel):
    model_config = _REQUEST_CONFIG

    session_id: SessionId = Field(
        ..., validation_alias=AliasChoices("sessionId", "Uuid", "session_id")
    )
    teams: List[TeamName] = Field(
        default_factory=list, validation_alias=AliasChoices("teams", "Teams")
    )
