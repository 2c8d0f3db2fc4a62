"""Action factory.

Selects the strategy for a rule action from its label:

- ``exec``: call a service of the current cell (ServiceUrlStrategy)
- ``relay``: post to an external URL (RelayStrategy)
- ``relay.event``: post to another cell's event endpoint (RelayEventStrategy)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chainhook.logging import get_logger

from .post import PostAction
from .strategy import RelayEventStrategy, RelayStrategy, ServiceUrlStrategy

if TYPE_CHECKING:
    from chainhook.config import Settings
    from chainhook.models import ActionInfo

    from .observer import DeliveryObserver
    from .post import ClientFactory
    from .strategy import PostStrategy, TokenProvider

logger = get_logger(__name__)

ACTION_EXEC = "exec"
ACTION_RELAY = "relay"
ACTION_RELAY_EVENT = "relay.event"

SUPPORTED_ACTIONS = (ACTION_EXEC, ACTION_RELAY, ACTION_RELAY_EVENT)


def create_strategy(
    action_info: ActionInfo,
    *,
    cell_url: str | None = None,
    token: str | None = None,
    token_provider: TokenProvider | None = None,
) -> PostStrategy | None:
    """Create the strategy for an action label, or None if the label is unknown."""
    action = action_info.action.lower()
    if action == ACTION_EXEC:
        return ServiceUrlStrategy(cell_url, action_info.service, token=token)
    if action == ACTION_RELAY:
        return RelayStrategy(action_info.service, cell_url=cell_url, token_provider=token_provider)
    if action == ACTION_RELAY_EVENT:
        return RelayEventStrategy(
            action_info.service, cell_url=cell_url, token_provider=token_provider
        )
    return None


def create_action(
    action_info: ActionInfo,
    *,
    cell_url: str | None = None,
    token: str | None = None,
    token_provider: TokenProvider | None = None,
    client_factory: ClientFactory | None = None,
    observer: DeliveryObserver | None = None,
    settings: Settings | None = None,
) -> PostAction | None:
    """Create a webhook action for a rule.

    Args:
        action_info: Rule configuration.
        cell_url: Cell running the rule. Defaults to settings.cell_url.
        token: Bearer token for exec actions.
        token_provider: Token source for relay actions, given the event's roles.
        client_factory: HTTP client factory override.
        observer: Delivery observer override.
        settings: Settings override.

    Returns:
        The action, or None if the action label is not a webhook action.
    """
    if settings is None:
        from chainhook.config import settings as default_settings

        settings = default_settings

    strategy = create_strategy(
        action_info,
        cell_url=cell_url or settings.cell_url,
        token=token,
        token_provider=token_provider,
    )
    if strategy is None:
        logger.warning(
            "Unsupported action", action=action_info.action, service=action_info.service
        )
        return None

    return PostAction(
        action_info,
        strategy,
        client_factory=client_factory,
        observer=observer,
        settings=settings,
    )


__all__ = [
    "ACTION_EXEC",
    "ACTION_RELAY",
    "ACTION_RELAY_EVENT",
    "SUPPORTED_ACTIONS",
    "create_action",
    "create_strategy",
]
