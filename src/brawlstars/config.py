"""
Configuration management for the Brawl Stars client using pydantic-settings.

Environment variables are loaded from a .env file. Client instances take a
ClientOptions object; Settings.client_options() builds one from the
environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.brawlstars.com/v1"
DEFAULT_USER_AGENT = "brawlstars-py (https://github.com/brawlstars-py/brawlstars)"


class CacheOptions(BaseModel):
    """Tuning for the in-memory response cache."""

    check_period: float = Field(
        default=600,
        ge=0,
        description="Seconds between sweeps of expired entries (0 = lazy only)",
    )
    max_ttl: int | None = Field(
        default=None, ge=1, description="Upper bound for any entry lifetime"
    )
    default_ttl: int = Field(
        default=0,
        ge=0,
        description="Lifetime when set() is called without a ttl (0 = don't store)",
    )

    model_config = ConfigDict(frozen=True)


class ClientOptions(BaseModel):
    """Per-client options. The token is passed to the client separately."""

    cache: bool = Field(default=True, description="Enable response caching")
    cache_options: CacheOptions = Field(default_factory=CacheOptions)
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    model_config = ConfigDict(frozen=True)


class BrawlStarsSettings(BaseSettings):
    """API credentials and endpoint."""

    token: SecretStr = Field(default=SecretStr(""), description="API bearer token")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="BRAWLSTARS_")

    @property
    def has_token(self) -> bool:
        """Check if an API token is configured."""
        return bool(self.token.get_secret_value())


class CacheSettings(BaseSettings):
    """Caching configuration."""

    enabled: bool = Field(default=True, description="Enable response caching")
    check_period: float = Field(
        default=600, ge=0, description="Expired entry sweep interval in seconds"
    )
    max_ttl: int | None = Field(
        default=None, ge=1, description="Cap on server-supplied max-age"
    )

    model_config = SettingsConfigDict(env_prefix="CACHE_")


class AppSettings(BaseSettings):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )

    model_config = SettingsConfigDict(env_prefix="")


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    api: BrawlStarsSettings = Field(default_factory=BrawlStarsSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    def client_options(self) -> ClientOptions:
        """Build client options from the loaded settings."""
        return ClientOptions(
            cache=self.cache.enabled,
            cache_options=CacheOptions(
                check_period=self.cache.check_period,
                max_ttl=self.cache.max_ttl,
            ),
            base_url=self.api.base_url,
            timeout=self.api.timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    from dotenv import load_dotenv

    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path, override=False)

    return Settings()
