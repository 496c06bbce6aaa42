"""Configuration management for the Movies App."""

from functools import lru_cache
from typing import List
from urllib.parse import urlparse

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The upstream values are never defaulted. A missing value is reported
    by the handler that needs it, see `missing()`.
    """

    # TMDB
    api_key: SecretStr | None = None
    api_url_popular: str | None = None
    api_url_search: str | None = None
    api_url_movie: str | None = None  # detail base, requested as <base>/<id>

    # Network settings
    # Proxy configuration in the format http://host:port or socks5://host:port
    proxy: str | None = None

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https", "socks4", "socks5", "socks5h"):
            raise ValueError(
                "Proxy must be a valid URL with scheme http/https/socks4/socks5/socks5h"
            )
        if not parsed.netloc:
            raise ValueError("Proxy must have a host and port")
        return v

    # App settings
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    def missing(self, *fields: str) -> List[str]:
        """Return the environment variable names of unset or empty fields."""
        names = []
        for field in fields:
            value = getattr(self, field)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if not value:
                names.append(field.upper())
        return names

    @property
    def api_key_value(self) -> str:
        return self.api_key.get_secret_value() if self.api_key else ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
