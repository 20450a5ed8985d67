# roster_engine/reference/static_data.py
import json
from pathlib import Path
from typing import Any, Dict, Mapping

from loguru import logger
from pydantic import ValidationError

from roster_engine.calculation.score_calculator import DEFAULT_TOP_N, ScoreCalculator
from roster_engine.models.player import PlayerAttributes
from roster_engine.models.team import TeamSnapshot
from roster_engine.utils.misc_utils import canonical_team_key

PLAYERS_FILE = "players.json"
TEAMS_FILE = "teams.json"

# Positional layout of legacy player table rows
POSITIONAL_FIELDS = (
    "name",
    "overall",
    "insideScoring",
    "outsideScoring",
    "athleticism",
    "playmaking",
    "rebounding",
    "defending",
)


class UnknownTeamError(Exception):
    """Raised when a static lookup names a franchise with no seed snapshot."""

    def __init__(self, team: str):
        super().__init__(f"Unknown franchise: {team}")
        self.team = team


class ReferenceDataError(Exception):
    """Raised when a reference data file cannot be read or parsed."""

    pass


def parse_player(player_id: str, raw: Any) -> PlayerAttributes:
    """Accepts either a mapping or the positional [name, overall, ...] row."""
    if isinstance(raw, (list, tuple)):
        if len(raw) != len(POSITIONAL_FIELDS):
            raise ReferenceDataError(
                f"Player {player_id}: expected {len(POSITIONAL_FIELDS)} fields, got {len(raw)}"
            )
        raw = dict(zip(POSITIONAL_FIELDS, raw))
    try:
        return PlayerAttributes.model_validate(raw)
    except ValidationError as e:
        raise ReferenceDataError(f"Player {player_id}: {e}") from e


class StaticReferenceData:
    """Read-only player attribute table and franchise seed snapshots."""

    def __init__(
        self,
        players: Mapping[str, PlayerAttributes],
        seeds: Mapping[str, TeamSnapshot],
    ):
        self._players: Dict[str, PlayerAttributes] = dict(players)
        self._seeds: Dict[str, TeamSnapshot] = {
            canonical_team_key(name): snapshot for name, snapshot in seeds.items()
        }
        self.team_names = sorted(seeds)

    @property
    def players(self) -> Mapping[str, PlayerAttributes]:
        return self._players

    def seed_snapshot(self, team: str) -> TeamSnapshot:
        """Returns a copy of the seeded snapshot for ``team``."""
        snapshot = self._seeds.get(canonical_team_key(team))
        if snapshot is None:
            raise UnknownTeamError(team)
        return snapshot.model_copy(deep=True)

    @classmethod
    def from_dicts(
        cls,
        players_doc: Mapping[str, Any],
        teams_doc: Mapping[str, Any],
        top_n: int = DEFAULT_TOP_N,
    ) -> "StaticReferenceData":
        players = {
            player_id: parse_player(player_id, raw)
            for player_id, raw in players_doc.get("playerData", {}).items()
        }
        calculator = ScoreCalculator(players, top_n=top_n)

        seeds: Dict[str, TeamSnapshot] = {}
        for name, raw in teams_doc.get("teams", {}).items():
            raw = dict(raw)
            # Seeds without a stored score get one from their own roster
            if raw.get("score") is None:
                raw["score"] = calculator.compute_score(raw.get("players", []))
            try:
                seeds[name] = TeamSnapshot.model_validate(raw)
            except ValidationError as e:
                raise ReferenceDataError(f"Team {name}: {e}") from e

        logger.info(
            f"Loaded reference data: {len(players)} players, {len(seeds)} franchises."
        )
        return cls(players, seeds)

    @classmethod
    def load(cls, data_dir: Path, top_n: int = DEFAULT_TOP_N) -> "StaticReferenceData":
        """Loads players.json and teams.json from ``data_dir``."""
        return cls.from_dicts(
            _read_json(data_dir / PLAYERS_FILE),
            _read_json(data_dir / TEAMS_FILE),
            top_n=top_n,
        )


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read reference data from {path}: {e}")
        raise ReferenceDataError(f"Cannot read {path}: {e}") from e