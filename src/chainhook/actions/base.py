"""Base class for rule actions.

An action is what a rule runs when it fires. It receives the triggering
event and may hand back a follow-on event for further rule evaluation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chainhook.models import Event


class Action(ABC):
    """Abstract base class for rule actions."""

    @abstractmethod
    def execute(self, event: Event) -> Event | None:
        """Run the action for a single event.

        Args:
            event: Triggering event.

        Returns:
            Follow-on event, or None if the action produced nothing.
        """
        ...

    @abstractmethod
    def execute_batch(self, events: Sequence[Event]) -> Event | None:
        """Run the action for several events at once."""
        ...
