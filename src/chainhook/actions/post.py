"""Webhook dispatch action.

PostAction delivers one event to the URL supplied by its strategy and turns
the outcome into a follow-on event:

- no URL: nothing is sent and no event is produced;
- any HTTP response: the result is the status code, e.g. "200" or "500";
- no usable response (protocol or transport failure): the result is "404".

The "404" sentinel does not distinguish an unreachable endpoint from one
that answered 404. Receivers of the result event only learn that delivery
failed.

Example:
    ```python
    action = PostAction(
        ActionInfo(service="https://hooks.example/in", action="relay",
                   event_id="evt_1", rule_chain="rule_a"),
        StaticUrlStrategy("https://hooks.example/in"),
    )
    result = action.execute(event)  # result.info == "200"
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import httpx

from chainhook.exceptions import DeliveryError
from chainhook.http import HttpClientFactory, SecurityMode, resolve_security_mode
from chainhook.logging import delivery_context, get_logger

from .base import Action
from .observer import DeliveryObserver, LoggingObserver

if TYPE_CHECKING:
    from chainhook.config import Settings
    from chainhook.models import ActionInfo, Event

    from .strategy import PostStrategy

logger = get_logger(__name__)

FAILURE_RESULT = "404"
CONTENT_TYPE_JSON = "application/json; charset=UTF-8"

INVALID_RESPONSE = "Invalid Http response"
CONNECTION_ERROR = "Connection Error"

# Failures where the peer answered with something that is not valid HTTP
PROTOCOL_ERRORS: tuple[type[Exception], ...] = (
    httpx.ProtocolError,
    httpx.DecodingError,
    httpx.TooManyRedirects,
)

ClientFactory = Callable[[SecurityMode], httpx.Client]


def tracing_header_names(prefix: str) -> dict[str, str]:
    """Names of the causal tracing headers for a header prefix."""
    return {
        "request_key": f"{prefix}-RequestKey",
        "event_id": f"{prefix}-EventId",
        "rule_chain": f"{prefix}-RuleChain",
        "via": f"{prefix}-Via",
    }


def result_event(event: Event, action_info: ActionInfo, result: str) -> Event:
    """Derive the event describing a delivery outcome.

    Type, object, info, event id and rule chain come from the action;
    every other field is copied from the triggering event.
    """
    return (
        event.with_type(action_info.action)
        .with_object(action_info.service)
        .with_info(result)
        .with_event_id(action_info.event_id)
        .with_rule_chain(action_info.rule_chain)
    )


class PostAction(Action):
    """Posts an event as JSON to a webhook and reports the outcome.

    One synchronous attempt per execute() call; no retries. Nothing raised
    during delivery escapes execute(): failures become a result event with
    info "404".
    """

    def __init__(
        self,
        action_info: ActionInfo,
        strategy: PostStrategy,
        *,
        client_factory: ClientFactory | None = None,
        security_mode: SecurityMode | str | None = None,
        header_prefix: str | None = None,
        observer: DeliveryObserver | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the action.

        Args:
            action_info: Rule configuration of this action.
            strategy: Target URL and header strategy.
            client_factory: Creates the HTTP client for a security mode.
                Defaults to an HttpClientFactory built from settings.
            security_mode: TLS policy. Defaults to settings.security_mode.
            header_prefix: Tracing header prefix. Defaults to settings.header_prefix.
            observer: Delivery outcome sink. Defaults to LoggingObserver.
            settings: Settings used for the defaults above.

        Raises:
            ConfigurationError: If the security mode is unknown.
        """
        if settings is None:
            from chainhook.config import settings as default_settings

            settings = default_settings

        self._info = action_info
        self._strategy = strategy
        self._client_factory = client_factory or HttpClientFactory.from_settings(settings)
        self._security_mode = resolve_security_mode(security_mode or settings.security_mode)
        self._headers = tracing_header_names(header_prefix or settings.header_prefix)
        self._observer = observer or LoggingObserver()

    @property
    def action_info(self) -> ActionInfo:
        return self._info

    @property
    def strategy(self) -> PostStrategy:
        return self._strategy

    def execute(self, event: Event) -> Event | None:
        """Deliver the event and return the result event.

        Args:
            event: Triggering event.

        Returns:
            Result event, or None if the strategy resolved no URL.
        """
        url = self._strategy.get_request_url()
        if url is None:
            logger.debug(
                "No request url, skipping delivery",
                action=self._info.action,
                service=self._info.service,
            )
            return None

        with delivery_context(
            request_key=event.request_key,
            event_id=self._info.event_id,
            rule_chain=self._info.rule_chain,
        ):
            return self._deliver(url, event)

    def _deliver(self, url: str, event: Event) -> Event:
        body = event.to_payload_json().encode("utf-8")
        status_code = 0
        response_body = ""
        error: DeliveryError | None = None

        client: httpx.Client | None = None
        response: httpx.Response | None = None
        try:
            tracing = self.tracing_headers(event)
            client = self._client_factory(self._security_mode)
            request = client.build_request(
                "POST",
                url,
                content=body,
                headers={"Content-Type": CONTENT_TYPE_JSON, **tracing},
            )
            self._strategy.set_headers(request, event)
            self._restore_tracing_headers(request, tracing)

            response = client.send(request)
            status_code = response.status_code
            response_body = response.text
        except PROTOCOL_ERRORS as e:
            error = DeliveryError(url, INVALID_RESPONSE, str(e))
            error.__cause__ = e
        except Exception as e:
            error = DeliveryError(url, CONNECTION_ERROR, str(e))
            error.__cause__ = e
        finally:
            if response is not None:
                response.close()
            if client is not None:
                client.close()

        if error is not None:
            self._notify(url, lambda: self._observer.on_error(url, error.message, error))
            result = FAILURE_RESULT
        else:
            self._notify(
                url, lambda: self._observer.on_response(url, status_code, response_body)
            )
            result = str(status_code)

        return result_event(event, self._info, result)

    def _notify(self, url: str, call: Callable[[], None]) -> None:
        # Observer failures never change the delivery result
        try:
            call()
        except Exception:
            logger.exception(
                "Delivery observer failed",
                url=url,
                action=self._info.action,
                service=self._info.service,
                observer=type(self._observer).__name__,
            )

    def execute_batch(self, events: Sequence[Event]) -> Event | None:
        """Batch delivery is not supported; always returns None."""
        return None

    def tracing_headers(self, event: Event) -> dict[str, str]:
        """Build the causal tracing headers for an event.

        RequestKey is sent only when the event carries one and Via only when
        the strategy yields one. EventId and RuleChain are always sent.
        """
        headers: dict[str, str] = {}
        if event.request_key:
            headers[self._headers["request_key"]] = event.request_key
        headers[self._headers["event_id"]] = self._info.event_id
        headers[self._headers["rule_chain"]] = self._info.rule_chain
        via = self._strategy.get_via(event)
        if via:
            headers[self._headers["via"]] = via
        return headers

    def _restore_tracing_headers(self, request: httpx.Request, tracing: dict[str, str]) -> None:
        # Strategies may add headers but the tracing set is fixed
        for name, value in tracing.items():
            if request.headers.get(name) != value:
                logger.warning(
                    "Strategy overrode tracing header, restoring",
                    header=name,
                    action=self._info.action,
                    service=self._info.service,
                    strategy=type(self._strategy).__name__,
                )
                request.headers[name] = value


__all__ = [
    "CONNECTION_ERROR",
    "CONTENT_TYPE_JSON",
    "ClientFactory",
    "FAILURE_RESULT",
    "INVALID_RESPONSE",
    "PostAction",
    "result_event",
    "tracing_header_names",
]
