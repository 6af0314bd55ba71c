"""Sync configuration loaded from environment variables.

Constructed once at process start and passed explicitly into the pipeline;
nothing below the scripts reads the environment on its own.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from wodsync.errors import ConfigurationError


class WodSyncConfig(BaseSettings):
    """WOD sync configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Notion integration
    notion_token: str = Field(
        default="",
        description="Notion internal integration token",
    )
    notion_page_id: str = Field(
        default="",
        description="Root page that contains the WOD database",
    )
    notion_version: str = Field(
        default="2022-06-28",
        description="Notion-Version header sent with every request",
    )
    notion_base_url: str = Field(
        default="https://api.notion.com/v1",
        description="Notion REST API base URL",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Per-request network timeout",
    )

    # Source
    wod_markdown: str = Field(
        default="",
        description="Page text of the WOD site, as fetched by the caller",
    )
    wod_source_url: str = Field(
        default="https://vfuae.com/wod/",
        description="Value stored in the Source property of every record",
    )
    wod_timezone: str = Field(
        default="Asia/Dubai",
        description="Time zone in which 'today' is resolved",
    )
    wod_date: str = Field(
        default="",
        description="Optional YYYY-MM-DD override for the target date",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for cron)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def require_notion(self) -> None:
        """Fail fast when the Notion credentials are incomplete.

        Raises:
            ConfigurationError: Listing every missing setting.
        """
        missing = [
            name.upper()
            for name in ("notion_token", "notion_page_id")
            if not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing {', '.join(missing)} in environment/.env"
            )


# Singleton pattern
_config: WodSyncConfig | None = None


def get_config() -> WodSyncConfig:
    """Get the sync configuration singleton.

    Returns:
        WodSyncConfig: Sync configuration instance
    """
    global _config
    if _config is None:
        _config = WodSyncConfig()
    return _config
