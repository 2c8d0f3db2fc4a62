"""chainhook: deliver rule-chain events to webhooks.

A rule action renders the triggering event as JSON, posts it once to a
URL chosen by the action's strategy, and returns a follow-on event whose
``info`` carries the delivery outcome.

Quick Start:
    from chainhook import ActionInfo, Event, create_action

    action = create_action(
        ActionInfo(service="box/hook", action="exec",
                   event_id="evt_1", rule_chain="rule_a"),
        cell_url="https://cell.example/",
    )
    result = action.execute(Event(type="odata.create", object="box/odata/Set"))
    # result.type == "exec", result.info == "200" (or "404" if unreachable)
"""

__version__ = "0.1.0"

# Configuration
from .config import Settings, settings

# Exceptions
from .exceptions import ChainhookError, ConfigurationError, DeliveryError, RoleParseError

# Logging
from .logging import (
    bind_context,
    configure_from_settings,
    configure_logging,
    delivery_context,
    get_logger,
    unbind_context,
)

# Models
from .models import ActionInfo, Event, RoleReference

# Actions
from .actions import (
    Action,
    PostAction,
    PostStrategy,
    create_action,
    roles_of,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "settings",
    # Exceptions
    "ChainhookError",
    "ConfigurationError",
    "DeliveryError",
    "RoleParseError",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "delivery_context",
    # Models
    "ActionInfo",
    "Event",
    "RoleReference",
    # Actions
    "Action",
    "PostAction",
    "PostStrategy",
    "create_action",
    "roles_of",
]
