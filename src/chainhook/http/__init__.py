"""Outbound HTTP client construction."""

from .client import HttpClientFactory, SecurityMode, resolve_security_mode

__all__ = ["HttpClientFactory", "SecurityMode", "resolve_security_mode"]
