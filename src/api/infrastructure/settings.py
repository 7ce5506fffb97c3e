"""Application settings using pydantic-settings.

Settings are loaded from environment variables (or a local .env file) with
defaults that point at a local development MongoDB. Loading never fails:
malformed values fall back to their defaults and are reported as warnings.
"""

from __future__ import annotations

import re
from functools import lru_cache
from urllib.parse import urlsplit, urlunsplit

from pydantic import Field, PrivateAttr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.observability.probes import DefaultSettingsProbe, SettingsProbe

DEFAULT_SERVER_PORT = "8080"
DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_MONGODB_DATABASE = "synapse_sprint_db"

_PORT_PATTERN = re.compile(r"[0-9]+")
_MAX_PORT = 65535


class Settings(BaseSettings):
    """Process-wide settings.

    Environment variables:
        SERVER_PORT: Port the future HTTP layer will listen on (default: 8080)
        MONGODB_URI: MongoDB connection string (default: mongodb://localhost:27017)
        MONGODB_DATABASE: Database holding the application collections
            (default: synapse_sprint_db)
        LOG_LEVEL: Minimum log level (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_port: str = Field(
        default=DEFAULT_SERVER_PORT,
        description="Server port as a numeric string",
    )
    mongodb_uri: str = Field(
        default=DEFAULT_MONGODB_URI,
        description="MongoDB connection string",
    )
    mongodb_database: str = Field(
        default=DEFAULT_MONGODB_DATABASE,
        description="MongoDB database name",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")

    _rejected_server_port: str | None = PrivateAttr(default=None)

    @field_validator("mongodb_uri", mode="before")
    @classmethod
    def default_blank_uri(cls, v: object) -> object:
        """Treat an empty connection string as unset."""
        if isinstance(v, str) and not v.strip():
            return DEFAULT_MONGODB_URI
        return v

    @model_validator(mode="after")
    def fallback_invalid_port(self) -> "Settings":
        """Keep the default port when the configured one is not a usable port.

        The rejected value is remembered so the loader can report it.
        """
        port = self.server_port
        if (
            not _PORT_PATTERN.fullmatch(port)
            or len(port) > len(str(_MAX_PORT))
            or int(port) > _MAX_PORT
        ):
            self._rejected_server_port = self.server_port
            self.server_port = DEFAULT_SERVER_PORT
        return self

    @property
    def rejected_server_port(self) -> str | None:
        """The invalid SERVER_PORT value that was ignored, if any."""
        return self._rejected_server_port

    @property
    def redacted_mongodb_uri(self) -> str:
        """Connection string with any password masked, safe for logs."""
        return redact_uri(self.mongodb_uri)


def redact_uri(uri: str) -> str:
    """Mask the password in a connection string.

    Args:
        uri: A mongodb:// or mongodb+srv:// connection string

    Returns:
        The same URI with the password replaced by ``***``
    """
    parts = urlsplit(uri)
    if "@" not in parts.netloc:
        return uri

    credentials, _, hosts = parts.netloc.rpartition("@")
    username = credentials.split(":", 1)[0]
    netloc = f"{username}:***@{hosts}" if ":" in credentials else parts.netloc
    return urlunsplit(parts._replace(netloc=netloc))


def load_settings(probe: SettingsProbe | None = None) -> Settings:
    """Load settings from the environment and report what was adopted.

    Args:
        probe: Optional observability probe

    Returns:
        A fully populated Settings instance. Never raises for malformed
        SERVER_PORT or MONGODB_URI values.
    """
    probe = probe or DefaultSettingsProbe()
    probe.loading_configuration()

    settings = Settings()
    if settings.rejected_server_port is not None:
        probe.invalid_server_port(
            value=settings.rejected_server_port,
            default=settings.server_port,
        )

    probe.configuration_loaded(
        server_port=settings.server_port,
        mongodb_uri=settings.redacted_mongodb_uri,
    )
    return settings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return load_settings()
