"""Delivery observers.

PostAction reports the outcome of every delivery attempt to an observer
instead of writing to a global logger. LoggingObserver is the default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from chainhook.logging import get_logger

if TYPE_CHECKING:
    from chainhook.exceptions import DeliveryError


@runtime_checkable
class DeliveryObserver(Protocol):
    """Receives delivery outcomes."""

    def on_response(self, url: str, status_code: int, body: str) -> None:
        """Called when the endpoint answered, whatever the status code."""
        ...

    def on_error(self, url: str, message: str, error: DeliveryError) -> None:
        """Called when no usable response was obtained."""
        ...


class LoggingObserver:
    """Writes delivery outcomes to the structured log."""

    def __init__(self, name: str = "chainhook.delivery") -> None:
        self._logger = get_logger(name)

    def on_response(self, url: str, status_code: int, body: str) -> None:
        self._logger.info(body, url=url, status_code=status_code)

    def on_error(self, url: str, message: str, error: DeliveryError) -> None:
        self._logger.error(message, url=url, reason=error.reason, exc_info=error.__cause__)


@dataclass
class RecordingObserver:
    """Keeps delivery outcomes in memory.

    Attributes:
        responses: (url, status_code, body) per answered delivery.
        errors: (url, message, error) per failed delivery.
    """

    responses: list[tuple[str, int, str]] = field(default_factory=list)
    errors: list[tuple[str, str, DeliveryError]] = field(default_factory=list)

    def on_response(self, url: str, status_code: int, body: str) -> None:
        self.responses.append((url, status_code, body))

    def on_error(self, url: str, message: str, error: DeliveryError) -> None:
        self.errors.append((url, message, error))


__all__ = ["DeliveryObserver", "LoggingObserver", "RecordingObserver"]
