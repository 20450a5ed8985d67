import sys
import logging
from typing import Any, Optional

from loguru import logger

from roster_engine.config.settings import AppSettings, settings as default_settings

SENSITIVE_KEYS = ["key", "token", "password", "secret"]


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return "********"


def make_sensitive_data_filter(app_settings: AppSettings):
    """Builds a filter that masks credentials in log records."""

    def sensitive_data_filter(record: dict[str, Any]) -> bool:
        extra = record.get("extra")
        if isinstance(extra, dict):
            for extra_key, extra_value in extra.items():
                if any(sk in extra_key.lower() for sk in SENSITIVE_KEYS) and isinstance(
                    extra_value, str
                ):
                    extra[extra_key] = _mask(extra_value)

        # The Supabase key can end up in messages via client errors
        if app_settings.supabase_key and app_settings.supabase_key in record["message"]:
            record["message"] = record["message"].replace(
                app_settings.supabase_key, "********"
            )

        return True  # Keep the record after masking

    return sensitive_data_filter


class InterceptHandler(logging.Handler):
    """Routes standard logging records (httpx, postgrest, ...) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(app_settings: Optional[AppSettings] = None) -> None:
    """Configures Loguru logger based on application settings."""
    app_settings = app_settings or default_settings
    sensitive_data_filter = make_sensitive_data_filter(app_settings)

    logger.remove()  # Remove default handler

    # Basic console logging
    logger.add(
        sys.stderr,
        level=app_settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
        filter=sensitive_data_filter,
    )

    # One JSON object per line, rotated and compressed by loguru
    if app_settings.log_file:
        app_settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(app_settings.log_file),
            level="DEBUG",
            rotation=app_settings.log_rotation,
            retention=app_settings.log_retention,
            compression=app_settings.log_compression,
            serialize=True,
            enqueue=True,
            filter=sensitive_data_filter,
        )
        logger.info(f"File logging enabled at {app_settings.log_file}")

    logger.info(f"Logging initialized with level: {app_settings.log_level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info("Standard logging intercepted.")
