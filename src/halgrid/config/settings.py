"""
Configuration settings for the HalGrid fantasy insights server.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Sleeper (public API, username only)
    sleeper_username: Optional[str] = Field(default=None)

    # Yahoo OAuth tokens (authorization flow happens outside this server)
    yahoo_access_token: Optional[str] = Field(default=None)
    yahoo_refresh_token: Optional[str] = Field(default=None)
    yahoo_consumer_key: Optional[str] = Field(default=None)
    yahoo_consumer_secret: Optional[str] = Field(default=None)

    # ESPN private league cookies
    espn_s2: Optional[str] = Field(default=None)
    espn_swid: Optional[str] = Field(default=None)
    espn_league_ids: str = Field(default="", description="Comma-separated ESPN league ids")

    # Response cache
    cache_ttl_seconds: int = Field(default=300)

    # API Rate Limiting
    yahoo_api_rate_limit: int = Field(default=900)
    yahoo_api_rate_window_seconds: int = Field(default=3600)
    http_timeout_seconds: int = Field(default=30)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("./logs/halgrid.log"))

    # MCP Server Configuration
    mcp_server_name: str = Field(default="halgrid")
    mcp_server_version: str = Field(default="1.0.0")

    # Playoff simulation
    playoff_simulations: int = Field(default=10000, ge=100)
    simulation_seed: Optional[int] = Field(default=None)

    @property
    def espn_league_id_list(self) -> List[str]:
        return [lid.strip() for lid in self.espn_league_ids.split(",") if lid.strip()]

    def ensure_log_directory(self) -> None:
        """Create the log directory if it is missing."""
        self.log_file.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
