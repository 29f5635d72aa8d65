"""Configuration management for the Library Catalogue.

Settings are read from the environment (``LIBRARY_CATALOGUE_`` prefix) or a
local ``.env`` file and validated with pydantic-settings. Both front ends,
the text menu and the MCP server, read the same configuration.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.loan import DEFAULT_LOAN_PERIOD_DAYS


class CatalogueConfig(BaseSettings):
    """Library Catalogue configuration.

    Covers:
    - Server identification for the MCP handshake
    - The loan policy applied by ``borrow``
    - Logging
    """

    model_config = SettingsConfigDict(
        env_prefix="LIBRARY_CATALOGUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="library-catalogue",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        description="Transport used by the MCP server",
        pattern=r"^stdio$",
    )

    # === Loan Policy ===

    loan_period_days: int = Field(
        default=DEFAULT_LOAN_PERIOD_DAYS,
        description="Days between the loan date and the due date",
        ge=1,
        le=365,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Validate server name length."""
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @property
    def effective_log_level(self) -> str:
        """Debug mode always wins over the configured level."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def server_info(self) -> dict[str, str]:
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: CatalogueConfig | None = None


def get_config() -> CatalogueConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = CatalogueConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
