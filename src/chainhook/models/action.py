"""Per-rule action configuration."""

from pydantic import BaseModel, ConfigDict, Field


class ActionInfo(BaseModel):
    """Static configuration bound to one action when its rule fires.

    Attributes:
        service: Target service identifier; becomes the result event's object.
        action: Action label (e.g. "exec", "relay"); becomes the result event's type.
        event_id: Event id propagated in the X-...-EventId header.
        rule_chain: Rule chain propagated in the X-...-RuleChain header.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    service: str = Field(description="Target service identifier")
    action: str = Field(description="Action label")
    event_id: str = Field(description="Event id of this rule invocation")
    rule_chain: str = Field(description="Rule chain trace of this invocation")


__all__ = ["ActionInfo"]
