"""Data models for chainhook.

Models:
    - Event: Immutable platform event with clone-and-override helpers
    - ActionInfo: Static configuration of one rule action
    - RoleReference: URL identifying a role
"""

from .action import ActionInfo
from .event import Event
from .role import RoleReference

__all__ = [
    "ActionInfo",
    "Event",
    "RoleReference",
]
