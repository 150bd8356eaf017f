"""Centralized configuration management for Finboard.

Settings are built once at process start into an immutable
:class:`FinboardSettings` object and passed by reference into the components
that need them (Plaid client, retrieval service, API app). Nothing below the
entry points reads process environment directly.
"""

import logging
import os
import warnings
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationWarning

logger = logging.getLogger(__name__)

PlaidEnvironmentName = Literal["sandbox", "development", "production"]


class PlaidConfig(BaseModel):
    """Plaid API configuration settings."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(default="", description="Plaid client ID")
    secret: str = Field(default="", description="Plaid secret key")
    environment: PlaidEnvironmentName = Field(
        default="sandbox", description="Plaid environment"
    )
    client_name: str = Field(
        default="Finance Tracker", description="Name shown in the Plaid Link UI"
    )
    products: tuple[str, ...] = Field(
        default=("transactions",), description="Products requested at link time"
    )
    country_codes: tuple[str, ...] = Field(
        default=("US",), description="Country codes offered in Plaid Link"
    )
    language: str = Field(default="en", description="Plaid Link language")
    days_lookback: int = Field(
        default=30,
        ge=1,
        le=730,
        description="Default days to look back for transactions",
    )
    page_size: int = Field(
        default=500, ge=1, le=500, description="Transactions requested per page"
    )

    @property
    def has_credentials(self) -> bool:
        """Whether both the client ID and secret are set."""
        return bool(self.client_id and self.secret)

    def missing_credentials(self) -> list[str]:
        """Names of the credential environment variables that are unset."""
        missing: list[str] = []
        if not self.client_id:
            missing.append("PLAID_CLIENT_ID")
        if not self.secret:
            missing.append("PLAID_SECRET")
        return missing


class ServerConfig(BaseModel):
    """HTTP server settings."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=5000, ge=1, le=65535, description="Bind port")
    cors_origins: tuple[str, ...] = Field(
        default=("http://localhost:5173",),
        description="Origins allowed to call the API from a browser",
    )


class FinboardSettings(BaseSettings):
    """Main application settings with environment variable integration.

    Environment variables are loaded with the FINBOARD_ prefix.
    For nested configs, use double underscores: FINBOARD_SERVER__PORT

    The Plaid credentials keep their conventional names (PLAID_CLIENT_ID,
    PLAID_SECRET, PLAID_ENV) and are folded into the ``plaid`` section.
    """

    plaid: PlaidConfig = Field(default_factory=PlaidConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    debug: bool = Field(default=False, description="Enable debug mode")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FINBOARD_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    def __init__(self, **kwargs: Any):
        """Initialize settings, mapping the plain PLAID_* variables.

        Args:
            **kwargs: Additional configuration overrides
        """
        if "plaid" not in kwargs:
            plaid_config: dict[str, Any] = {}
            client_id = os.getenv("PLAID_CLIENT_ID")
            secret = os.getenv("PLAID_SECRET")
            env = os.getenv("PLAID_ENV")

            if client_id:
                plaid_config["client_id"] = client_id
            if secret:
                plaid_config["secret"] = secret
            if env and env.lower() in ("sandbox", "development", "production"):
                plaid_config["environment"] = env.lower()
            elif env:
                logger.warning(f"Unknown PLAID_ENV {env!r}; using sandbox")

            if plaid_config:
                kwargs["plaid"] = PlaidConfig(**plaid_config)

        super().__init__(**kwargs)

    def warn_missing_credentials(self) -> list[str]:
        """Warn, without failing, when Plaid credentials are missing.

        Returns:
            list[str]: Names of the missing variables (empty when complete)
        """
        missing = self.plaid.missing_credentials()
        if missing:
            message = (
                f"Missing required Plaid environment variables: {', '.join(missing)}. "
                "Plaid API calls will fail until they are set."
            )
            logger.warning(message)
            warnings.warn(message, ConfigurationWarning, stacklevel=2)
        return missing


_settings: FinboardSettings | None = None


def load_settings(**overrides: Any) -> FinboardSettings:
    """Build a settings object from the environment and any .env file.

    Missing Plaid credentials produce a :class:`ConfigurationWarning` but do
    not prevent startup.

    Args:
        **overrides: Explicit values that take precedence over the environment

    Returns:
        FinboardSettings: Newly constructed settings
    """
    load_dotenv()
    settings = FinboardSettings(**overrides)
    settings.warn_missing_credentials()
    return settings


def get_settings() -> FinboardSettings:
    """Get the process-wide settings, loading them on first use.

    Only entry points (CLI callback, ASGI factory) should call this; everything
    else receives the settings object explicitly.

    Returns:
        FinboardSettings: The cached configuration instance
    """
    global _settings

    if _settings is None:
        _settings = load_settings()
    return _settings


def clear_settings_cache() -> None:
    """Forget the cached settings so the next access reloads them."""
    global _settings
    _settings = None
