"""Rule actions that deliver events to webhooks.

Example:
    ```python
    from chainhook.actions import create_action
    from chainhook.models import ActionInfo, Event

    action = create_action(
        ActionInfo(service="https://hooks.example/in", action="relay",
                   event_id="evt_1", rule_chain="rule_a"),
        cell_url="https://cell.example/",
    )
    result = action.execute(Event(type="message", object="box/msg", info="sent"))
    ```
"""

from .base import Action
from .factory import (
    ACTION_EXEC,
    ACTION_RELAY,
    ACTION_RELAY_EVENT,
    SUPPORTED_ACTIONS,
    create_action,
    create_strategy,
)
from .observer import DeliveryObserver, LoggingObserver, RecordingObserver
from .post import FAILURE_RESULT, PostAction, result_event
from .roles import parse_role, roles_of
from .strategy import (
    BasePostStrategy,
    PostStrategy,
    RelayEventStrategy,
    RelayStrategy,
    ServiceUrlStrategy,
    StaticUrlStrategy,
)

__all__ = [
    "ACTION_EXEC",
    "ACTION_RELAY",
    "ACTION_RELAY_EVENT",
    "Action",
    "BasePostStrategy",
    "DeliveryObserver",
    "FAILURE_RESULT",
    "LoggingObserver",
    "PostAction",
    "PostStrategy",
    "RecordingObserver",
    "RelayEventStrategy",
    "RelayStrategy",
    "SUPPORTED_ACTIONS",
    "ServiceUrlStrategy",
    "StaticUrlStrategy",
    "create_action",
    "create_strategy",
    "parse_role",
    "result_event",
    "roles_of",
]
