from loguru import logger

from roster_engine.config.settings import AppSettings
from roster_engine.storage.base import TeamStore
from roster_engine.storage.memory_store import InMemoryTeamStore


async def build_team_store(app_settings: AppSettings) -> TeamStore:
    """Builds the TeamStore named by ``store_backend``."""
    if app_settings.store_backend == "supabase":
        # Imported lazily so the memory backend runs without Supabase configured
        from roster_engine.storage.supabase_store import (
            SupabaseTeamStore,
            create_supabase_client,
        )

        client = await create_supabase_client(app_settings)
        logger.info(f"Using Supabase table '{app_settings.roster_table}' for team records.")
        return SupabaseTeamStore(client, table_name=app_settings.roster_table)

    logger.info("Using in-memory team store.")
    return InMemoryTeamStore()
