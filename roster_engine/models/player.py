# roster_engine/models/player.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import Category


class PlayerAttributes(BaseModel):
    """Fixed-width attribute record for one player, keyed by player id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Reference data never changes

    overall: int  # Used only for ranking
    inside_scoring: int = Field(..., ge=0, alias="insideScoring")
    outside_scoring: int = Field(..., ge=0, alias="outsideScoring")
    athleticism: int = Field(..., ge=0)
    playmaking: int = Field(..., ge=0)
    rebounding: int = Field(..., ge=0)
    defending: int = Field(..., ge=0)
    name: Optional[str] = None

    def category_value(self, category: Category) -> int:
        return {
            Category.INSIDE_SCORING: self.inside_scoring,
            Category.OUTSIDE_SCORING: self.outside_scoring,
            Category.ATHLETICISM: self.athleticism,
            Category.PLAYMAKING: self.playmaking,
            Category.REBOUNDING: self.rebounding,
            Category.DEFENDING: self.defending,
        }[category]
