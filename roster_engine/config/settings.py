import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Supabase Configuration
    supabase_url: Optional[HttpUrl] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Anon or service key for the Supabase project."
    )
    roster_table: str = Field(
        "roster_data", description="Table holding one row per (uuid, team)."
    )

    # Backing store selection
    store_backend: Literal["supabase", "memory"] = Field(
        "memory",
        description="Which TeamStore implementation the engine is built with.",
    )

    # Reference data
    data_dir: Path = Field(
        DEFAULT_DATA_DIR,
        description="Directory holding players.json and teams.json.",
    )

    # Score Settings
    top_n_players: int = Field(
        8,
        ge=1,
        description="Number of players (by overall) averaged into a team score.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )
    log_file: Optional[Path] = Field(
        None, description="Optional JSON log file; rotated by loguru."
    )
    log_rotation: str = Field("20 MB", description="Size at which the log rotates.")
    log_retention: str = Field("14 days", description="How long rotated logs are kept.")
    log_compression: str = Field("gz", description="Compression for rotated logs.")

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
