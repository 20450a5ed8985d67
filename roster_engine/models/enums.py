from enum import Enum


class Category(str, Enum):
    """Scoring categories, in the order they appear in a score vector."""

    INSIDE_SCORING = "insideScoring"
    OUTSIDE_SCORING = "outsideScoring"
    ATHLETICISM = "athleticism"
    PLAYMAKING = "playmaking"
    REBOUNDING = "rebounding"
    DEFENDING = "defending"


class LookupMode(str, Enum):
    STORE = "store"
    STATIC_FALLBACK = "staticFallback"


class ResponseStatus(str, Enum):
    OK = "ok"
    CLIENT_ERROR = "client_error"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"


# Fixed score-vector order; Enum iteration preserves definition order
CATEGORY_ORDER = tuple(Category)
SCORE_VECTOR_LENGTH = len(CATEGORY_ORDER)
