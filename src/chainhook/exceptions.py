"""Chainhook exception hierarchy.

All exceptions inherit from ChainhookError for easy catching. Note that
delivery failures never escape PostAction.execute(); DeliveryError only
travels to the delivery observer.
"""

from __future__ import annotations


class ChainhookError(Exception):
    """Base exception for all chainhook errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "chainhook_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ConfigurationError(ChainhookError):
    """Invalid action or strategy configuration."""

    code: str = "configuration_error"


class RoleParseError(ChainhookError):
    """A segment of an event's roles string is not a role URL.

    Attributes:
        segment: The offending segment.
    """

    code: str = "role_parse_error"

    def __init__(self, segment: str, message: str) -> None:
        self.segment = segment
        super().__init__(f"invalid role reference {segment!r}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "segment": self.segment,
                "message": self.message,
            }
        }


class DeliveryError(ChainhookError):
    """A webhook delivery attempt failed before a response was obtained.

    Attributes:
        url: Target URL of the delivery.
        reason: Short failure category ("Invalid Http response" or "Connection Error").
    """

    code: str = "delivery_error"

    def __init__(self, url: str, reason: str, detail: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {detail}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "url": self.url,
                "reason": self.reason,
                "message": self.message,
            }
        }


__all__ = [
    "ChainhookError",
    "ConfigurationError",
    "DeliveryError",
    "RoleParseError",
]
