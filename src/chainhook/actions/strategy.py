"""URL and header strategies for webhook actions.

A strategy tells PostAction where to deliver an event and which extra
headers to send. Strategies only compose strings from their configuration;
they never perform I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import urlparse

from chainhook.logging import get_logger
from chainhook.models import RoleReference

from .roles import roles_of

if TYPE_CHECKING:
    import httpx

    from chainhook.models import Event

logger = get_logger(__name__)

# Service path schemes resolved against the current cell
LOCALCELL_SCHEMES = ("personium-localcell:", "localcell:")

EVENT_ENDPOINT = "__event"

TokenProvider = Callable[[Sequence[RoleReference]], str | None]


@runtime_checkable
class PostStrategy(Protocol):
    """Pluggable target resolution for PostAction."""

    def get_request_url(self) -> str | None:
        """Return the delivery URL, or None to skip delivery."""
        ...

    def set_headers(self, request: httpx.Request, event: Event) -> None:
        """Add variant specific headers to the outgoing request."""
        ...

    def get_via(self, event: Event) -> str | None:
        """Return the value of the Via header."""
        ...


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.netloc)


def _with_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"


class BasePostStrategy:
    """Default strategy behavior: pass Via through, add no headers."""

    def get_request_url(self) -> str | None:
        raise NotImplementedError

    def set_headers(self, request: httpx.Request, event: Event) -> None:
        return None

    def get_via(self, event: Event) -> str | None:
        return event.via


class StaticUrlStrategy(BasePostStrategy):
    """Deliver to a fixed URL with fixed extra headers."""

    def __init__(self, url: str | None, headers: Mapping[str, str] | None = None) -> None:
        self._url = url
        self._headers = dict(headers or {})

    def get_request_url(self) -> str | None:
        return self._url

    def set_headers(self, request: httpx.Request, event: Event) -> None:
        for name, value in self._headers.items():
            request.headers[name] = value


class ServiceUrlStrategy(BasePostStrategy):
    """Deliver to a service hosted in the current cell ("exec" actions).

    The service may be given as:
    - a box relative path, ``box/service``;
    - a localcell path, ``personium-localcell:/box/service``;
    - an absolute URL, which must point inside the cell.

    Anything else resolves to no URL.
    """

    def __init__(self, cell_url: str | None, service: str, token: str | None = None) -> None:
        """Initialize the strategy.

        Args:
            cell_url: URL of the cell running the rule.
            service: Service reference from the rule configuration.
            token: Optional bearer token sent to the service.
        """
        self._cell_url = _with_trailing_slash(cell_url) if cell_url else None
        self._service = service.strip()
        self._token = token

    def get_request_url(self) -> str | None:
        if self._cell_url is None or not self._service:
            return None

        service = self._service
        for scheme in LOCALCELL_SCHEMES:
            if service.lower().startswith(scheme):
                path = service[len(scheme) :].lstrip("/")
                return self._cell_url + path if path else None

        if _is_http_url(service):
            if service.startswith(self._cell_url):
                return service
            logger.debug("Service is outside cell", service=service, cell_url=self._cell_url)
            return None

        if ":" in service.split("/", 1)[0]:
            # Unknown scheme
            return None
        path = service.lstrip("/")
        return self._cell_url + path if path else None

    def set_headers(self, request: httpx.Request, event: Event) -> None:
        if self._token:
            request.headers["Authorization"] = f"Bearer {self._token}"


class RelayStrategy(BasePostStrategy):
    """Relay events to an external http(s) endpoint ("relay" actions).

    The relaying cell appends itself to the Via hop trace. When a token
    provider is configured it is handed the event's permitted roles and
    its token is sent as a bearer credential.
    """

    def __init__(
        self,
        service: str,
        cell_url: str | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        self._service = service.strip()
        self._cell_url = _with_trailing_slash(cell_url) if cell_url else None
        self._token_provider = token_provider

    def get_request_url(self) -> str | None:
        return self._service if _is_http_url(self._service) else None

    def set_headers(self, request: httpx.Request, event: Event) -> None:
        if self._token_provider is None:
            return
        token = self._token_provider(roles_of(event))
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    def get_via(self, event: Event) -> str | None:
        if self._cell_url is None:
            return event.via
        if event.via:
            return f"{event.via},{self._cell_url}"
        return self._cell_url


class RelayEventStrategy(RelayStrategy):
    """Relay events to another cell's event endpoint ("relay.event" actions).

    The service is the target cell URL; delivery goes to ``<cell>/__event``.
    """

    def get_request_url(self) -> str | None:
        if not _is_http_url(self._service):
            return None
        return _with_trailing_slash(self._service) + EVENT_ENDPOINT


__all__ = [
    "BasePostStrategy",
    "EVENT_ENDPOINT",
    "LOCALCELL_SCHEMES",
    "PostStrategy",
    "RelayEventStrategy",
    "RelayStrategy",
    "ServiceUrlStrategy",
    "StaticUrlStrategy",
    "TokenProvider",
]
