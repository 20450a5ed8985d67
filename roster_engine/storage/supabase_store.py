# roster_engine/storage/supabase_store.py
from typing import Any, Optional

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client

from roster_engine.codec.record_codec import EncodingError, WireRecord
from roster_engine.config.settings import AppSettings
from roster_engine.storage.base import StoreOperationError, TeamKey, TeamStore


async def create_supabase_client(app_settings: AppSettings) -> AsyncClient:
    """Creates the async Supabase client the store is injected with."""
    if not app_settings.supabase_url or not app_settings.supabase_key:
        logger.critical("Supabase URL or Key not configured in settings.")
        raise SystemExit("Supabase configuration missing.")

    logger.debug(
        f"Attempting to initialize Async Supabase client with URL: {app_settings.supabase_url}"
    )
    key_snippet = f"{app_settings.supabase_key[:5]}...{app_settings.supabase_key[-5:]}"
    logger.debug(f"Using Supabase Key (snippet): {key_snippet}")

    client: AsyncClient = await create_async_client(
        str(app_settings.supabase_url), app_settings.supabase_key
    )
    logger.success("Async Supabase client initialized successfully.")
    return client


class SupabaseTeamStore(TeamStore):
    """
    Team records in a Supabase table.

    One row per (uuid, team), the composite primary key. The wire record
    lives in the ``item`` jsonb column.
    """

    def __init__(self, client: AsyncClient, table_name: str = "roster_data"):
        self.client = client
        self.table_name = table_name

    async def _execute(self, operation: str, key: TeamKey, query: Any) -> APIResponse:
        try:
            return await query.execute()
        except APIError as e:
            logger.error(f"Supabase API error during {operation} on {self.table_name}: {e.message}")
            logger.debug(f"Full APIError details: {e}")
            raise StoreOperationError(operation, [key], str(e.message)) from e
        except Exception as e:
            logger.exception(
                f"An unexpected error occurred during {operation} on {self.table_name}: {e}"
            )
            raise StoreOperationError(operation, [key], str(e)) from e

    async def get(self, key: TeamKey) -> Optional[WireRecord]:
        session_id, team = key
        query = (
            self.client.table(self.table_name)
            .select("item")
            .eq("uuid", session_id)
            .eq("team", team)
            .limit(1)
        )
        response = await self._execute("get", key, query)
        if not response.data:
            return None
        item = response.data[0].get("item")
        if not isinstance(item, dict):
            logger.error(f"Row for {key} in {self.table_name} has no usable item: {item!r}")
            raise EncodingError(f"Stored row for {key} has no wire record")
        return item

    async def put(self, key: TeamKey, record: WireRecord) -> None:
        session_id, team = key
        row = {"uuid": session_id, "team": team, "item": record}
        query = self.client.table(self.table_name).upsert(row, on_conflict="uuid,team")
        await self._execute("put", key, query)
        logger.success(f"Successfully upserted record for {key} to {self.table_name}.")

    async def delete(self, key: TeamKey) -> None:
        session_id, team = key
        query = (
            self.client.table(self.table_name)
            .delete()
            .eq("uuid", session_id)
            .eq("team", team)
        )
        await self._execute("delete", key, query)
        logger.debug(f"Deleted record for {key} from {self.table_name} (if present).")
