"""HTTP client factory.

Every delivery gets a fresh httpx.Client built here, so TLS policy and
timeouts live in one place. The caller owns the client and must close it.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import httpx

from chainhook.exceptions import ConfigurationError

if TYPE_CHECKING:
    from chainhook.config import Settings


class SecurityMode(str, Enum):
    """TLS policy of an outbound client."""

    INSECURE = "insecure"  # Certificates are not validated
    DEFAULT = "default"  # Strict certificate validation


def resolve_security_mode(mode: SecurityMode | str) -> SecurityMode:
    """Convert a configured security mode name to a SecurityMode.

    Raises:
        ConfigurationError: If the name is not a known mode.
    """
    try:
        return SecurityMode(mode)
    except ValueError as e:
        known = ", ".join(m.value for m in SecurityMode)
        raise ConfigurationError(f"Unknown security mode {mode!r} (expected one of: {known})") from e


class HttpClientFactory:
    """Creates configured httpx clients.

    Example:
        ```python
        factory = HttpClientFactory(timeout_seconds=10.0)
        with factory.create(SecurityMode.DEFAULT) as client:
            client.post("https://example.com/hook", content="{}")
        ```
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            timeout_seconds: Timeout applied to connect, read, write and pool.
            transport: Optional transport override (e.g. httpx.MockTransport).
        """
        self._timeout = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> HttpClientFactory:
        """Build a factory from application settings."""
        return cls(timeout_seconds=settings.http_timeout_seconds, transport=transport)

    def create(self, mode: SecurityMode | str = SecurityMode.INSECURE) -> httpx.Client:
        """Create a ready-to-use client for the given security mode."""
        from chainhook import __version__

        mode = resolve_security_mode(mode)
        return httpx.Client(
            verify=mode is SecurityMode.DEFAULT,
            timeout=self._timeout,
            headers={"User-Agent": f"chainhook/{__version__}"},
            transport=self._transport,
        )

    def __call__(self, mode: SecurityMode | str = SecurityMode.INSECURE) -> httpx.Client:
        return self.create(mode)


__all__ = ["HttpClientFactory", "SecurityMode", "resolve_security_mode"]
