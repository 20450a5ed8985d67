import sys
import asyncio
import json
from pathlib import Path
from typing import Any, Dict

# --- Settings/Logging ---
from roster_engine.logging.setup import setup_logging
from roster_engine.config.settings import settings

setup_logging()

from loguru import logger

# --- Engine Imports ---
from roster_engine.calculation.score_calculator import legacy_score_total
from roster_engine.engine import RosterEngine
from roster_engine.models.enums import CATEGORY_ORDER, LookupMode

from rich import print
from rich.panel import Panel
from rich.table import Table

SAMPLE_TRADE = settings.data_dir / "sample_trade.json"


def load_payload(path: Path) -> Dict[str, Any]:
    """Reads a trade payload from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def score_table(teams, scores) -> Table:
    table = Table(title="Post-trade scores")
    table.add_column("Team")
    for category in CATEGORY_ORDER:
        table.add_column(category.value, justify="right")
    table.add_column("Total", justify="right")
    for team, score in zip(teams, scores):
        table.add_row(team, *(str(v) for v in score), str(legacy_score_total(score)))
    return table


async def main(payload_path: Path) -> int:
    """Runs one trade through the engine and shows the stored result."""
    logger.info("Starting Roster Trade Engine")

    engine = await RosterEngine.from_settings(settings)
    try:
        payload = load_payload(payload_path)
        session_id = payload.get("sessionId") or payload.get("Uuid")
        teams = payload.get("tradeTeams") or payload.get("TradeTeams") or []

        for team in teams:
            before = await engine.lookup(
                {"sessionId": session_id, "team": team, "mode": LookupMode.STATIC_FALLBACK}
            )
            if before.ok:
                logger.info(f"{team} before trade: score {before.body['score']}")

        response = await engine.trade(payload)
        if response.body:
            print(score_table(teams, response.body))
        if not response.ok:
            print(Panel(str(response.error), title=f"Trade {response.status.value}"))
            return 1

        for team in teams:
            stored = await engine.lookup({"sessionId": session_id, "team": team})
            print(
                Panel(
                    json.dumps(stored.body, indent=2),
                    title=f"{team} ({stored.status.value})",
                )
            )
        logger.success("Trade stored and verified.")
        return 0
    finally:
        await engine.close()


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else SAMPLE_TRADE
    try:
        sys.exit(asyncio.run(main(path)))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
