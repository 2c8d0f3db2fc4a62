"""Permitted-role parsing for events."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from chainhook.exceptions import RoleParseError
from chainhook.models import RoleReference

if TYPE_CHECKING:
    from chainhook.models import Event

ROLE_SEPARATOR = ","


def parse_role(segment: str) -> RoleReference:
    """Parse one role URL.

    Raises:
        RoleParseError: If the segment is not an http(s) URL.
    """
    try:
        return RoleReference(url=segment)
    except ValidationError as e:
        raise RoleParseError(segment, e.errors()[0]["msg"]) from e


def roles_of(event: Event) -> list[RoleReference]:
    """Get the permitted role list carried by an event.

    The whole list is rejected if any segment fails to parse: a malformed
    roles string yields no roles at all, never a partial list.

    Args:
        event: Event whose ``roles`` field is read.

    Returns:
        Role references in input order, or an empty list.
    """
    if event.roles is None:
        return []
    try:
        return [parse_role(segment) for segment in event.roles.split(ROLE_SEPARATOR)]
    except RoleParseError:
        return []


__all__ = ["ROLE_SEPARATOR", "parse_role", "roles_of"]
