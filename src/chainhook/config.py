"""Configuration management for chainhook."""

import logging
import warnings
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Chainhook configuration.

    All settings can be overridden via environment variables with
    the CHAINHOOK_ prefix. For example:
        CHAINHOOK_HEADER_PREFIX=X-Acme
        CHAINHOOK_SECURITY_MODE=default

    Security Notes:
        - The insecure security mode skips TLS certificate validation
        - Using it in production (CHAINHOOK_ENV=production) emits a warning
    """

    # Environment
    env: Literal["development", "production", "test"] = Field(
        default="development",
        description="Environment: development, production, or test",
    )

    # Wire format
    header_prefix: str = Field(
        default="X-Personium",
        description="Prefix for the causal tracing headers (RequestKey, EventId, RuleChain, Via)",
    )

    # HTTP client
    security_mode: Literal["insecure", "default"] = Field(
        default="insecure",
        description="TLS policy of the outbound client: insecure skips certificate validation",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        description="Timeout applied by the shared HTTP client to each delivery",
    )

    # Cell
    cell_url: str | None = Field(
        default=None,
        description="URL of the cell the actions run in (used by exec and relay actions)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format: json for production, text for development",
    )

    model_config = {
        "env_prefix": "CHAINHOOK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("header_prefix")
    @classmethod
    def validate_header_prefix(cls, value: str) -> str:
        """Header prefix must be an X- extension header name without whitespace."""
        if not value.startswith("X-"):
            raise ValueError(f"header_prefix must start with 'X-', got {value!r}")
        if any(ch.isspace() for ch in value):
            raise ValueError(f"header_prefix must not contain whitespace, got {value!r}")
        value = value.rstrip("-")
        if len(value) <= len("X-"):
            raise ValueError(f"header_prefix needs a name after 'X-', got {value!r}")
        return value

    @model_validator(mode="after")
    def validate_security_settings(self) -> "Settings":
        """Warn when TLS validation is disabled in production."""
        if self.env == "production" and self.security_mode == "insecure":
            warnings.warn(
                "TLS certificate validation is disabled in production environment. "
                "Set CHAINHOOK_SECURITY_MODE=default to enable it.",
                UserWarning,
                stacklevel=2,
            )
            logger.warning("Insecure HTTP client in production - certificates are not validated")
        return self


# Global settings instance
settings = Settings()
