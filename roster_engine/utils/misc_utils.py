# roster_engine/utils/misc_utils.py
import re


def canonical_team_key(name: str) -> str:
    """Case- and whitespace-insensitive key for a franchise name."""
    combined = "_".join(name.lower().split())
    # Remove non-alphanumeric characters (except underscore)
    return re.sub(r"[^\w]+", "", combined)


def format_pick_token(year: int, draft_round: int, protection: str) -> str:
    """Flattens a structured [year, round, protection] pick into its token form."""
    return f"{year}-R{draft_round}-{protection}"
