from typing import List, Mapping

from loguru import logger

from roster_engine.models.enums import CATEGORY_ORDER, SCORE_VECTOR_LENGTH
from roster_engine.models.player import PlayerAttributes
from roster_engine.models.team import Roster, ScoreVector

DEFAULT_TOP_N = 8


class UnknownPlayerError(Exception):
    """Raised when a roster references a player missing from the attribute table."""

    def __init__(self, player_id: str):
        super().__init__(f"Unknown player id: {player_id}")
        self.player_id = player_id


class ScoreCalculator:
    """Derives a team's score vector from its roster."""

    def __init__(
        self, player_table: Mapping[str, PlayerAttributes], top_n: int = DEFAULT_TOP_N
    ):
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")
        self.player_table = player_table
        self.top_n = top_n

    def _attributes_for(self, roster: Roster) -> List[PlayerAttributes]:
        attributes = []
        for player_id in roster:
            player = self.player_table.get(player_id)
            if player is None:
                logger.error(f"Score calculation failed: unknown player {player_id}")
                raise UnknownPlayerError(player_id)
            attributes.append(player)
        return attributes

    def top_players(self, roster: Roster) -> List[PlayerAttributes]:
        """Top-N entries by overall, descending. Ties keep roster order."""
        attributes = self._attributes_for(roster)
        # sorted() is stable, so equal overalls stay in input order
        ranked = sorted(attributes, key=lambda p: p.overall, reverse=True)
        return ranked[: self.top_n]

    def compute_score(self, roster: Roster) -> ScoreVector:
        """
        Averages each category across the roster's top players.

        Each category is summed and floor-divided by the subset size on its
        own. An empty roster scores all zeros.
        """
        selected = self.top_players(roster)
        if not selected:
            logger.debug("Empty roster, returning zero score vector.")
            return [0] * SCORE_VECTOR_LENGTH

        size = len(selected)
        score = [
            sum(player.category_value(category) for player in selected) // size
            for category in CATEGORY_ORDER
        ]
        logger.debug(f"Computed score {score} from {size} of {len(roster)} players.")
        return score


def legacy_score_total(score: ScoreVector) -> int:
    """Scalar rating stored by the first record schema: category sum times ten."""
    return sum(score) * 10
