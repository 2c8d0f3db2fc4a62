"""Event model - the immutable unit flowing through rule chains."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Payload keys understood by existing webhook receivers
PAYLOAD_EXTERNAL = "External"
PAYLOAD_SCHEMA = "Schema"
PAYLOAD_SUBJECT = "Subject"
PAYLOAD_TYPE = "Type"
PAYLOAD_OBJECT = "Object"
PAYLOAD_INFO = "Info"


class Event(BaseModel):
    """Immutable platform event routed through rule chains.

    Events are never modified after creation. Deriving a follow-on event
    (for example the outcome of a webhook delivery) produces a new Event
    that copies every field not explicitly overridden.

    Attributes:
        external: Whether the event originated outside the platform.
        schema_url: Schema (application) URL of the event's origin.
        subject: Acting identity.
        type: Event type.
        object: Resource or service the event is about.
        info: Free-form outcome or detail string.
        request_key: Correlation id supplied by the original caller.
        event_id: Identifier of the rule/action invocation.
        rule_chain: Trace of rules that already processed this event.
        via: Hop trace across cells.
        roles: Comma-separated list of role URLs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    external: bool = Field(default=False, description="Origin outside the platform")
    schema_url: str | None = Field(default=None, description="Schema URL (optional)")
    subject: str | None = Field(default=None, description="Acting identity (optional)")
    type: str = Field(default="", description="Event type")
    object: str = Field(default="", description="Subject resource or service")
    info: str = Field(default="", description="Outcome or detail")
    request_key: str | None = Field(default=None, description="Caller correlation id")
    event_id: str | None = Field(default=None, description="Rule/action invocation id")
    rule_chain: str | None = Field(default=None, description="Rule chain trace")
    via: str | None = Field(default=None, description="Hop trace")
    roles: str | None = Field(default=None, description="Comma-separated role URLs")

    def derive(self, **changes: Any) -> Event:
        """Return a copy of this event with the given fields replaced.

        Unknown field names are rejected, so a typo cannot silently
        produce an event missing the intended override.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown event fields: {sorted(unknown)}")
        return self.model_copy(update=changes)

    def with_type(self, value: str) -> Event:
        return self.derive(type=value)

    def with_object(self, value: str) -> Event:
        return self.derive(object=value)

    def with_info(self, value: str) -> Event:
        return self.derive(info=value)

    def with_event_id(self, value: str | None) -> Event:
        return self.derive(event_id=value)

    def with_rule_chain(self, value: str | None) -> Event:
        return self.derive(rule_chain=value)

    def to_payload(self) -> dict[str, Any]:
        """Build the webhook payload.

        Key order is fixed. Schema and Subject are omitted entirely when
        unset rather than sent as null.
        """
        payload: dict[str, Any] = {PAYLOAD_EXTERNAL: self.external}
        if self.schema_url is not None:
            payload[PAYLOAD_SCHEMA] = self.schema_url
        if self.subject is not None:
            payload[PAYLOAD_SUBJECT] = self.subject
        payload[PAYLOAD_TYPE] = self.type
        payload[PAYLOAD_OBJECT] = self.object
        payload[PAYLOAD_INFO] = self.info
        return payload

    def to_payload_json(self) -> str:
        """Serialize the payload as compact JSON."""
        return json.dumps(self.to_payload(), ensure_ascii=False, separators=(",", ":"))

    def __str__(self) -> str:
        return f"Event({self.type!r} on {self.object!r}: {self.info!r})"


__all__ = [
    "Event",
    "PAYLOAD_EXTERNAL",
    "PAYLOAD_INFO",
    "PAYLOAD_OBJECT",
    "PAYLOAD_SCHEMA",
    "PAYLOAD_SUBJECT",
    "PAYLOAD_TYPE",
]
