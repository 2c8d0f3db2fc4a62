"""Role reference model.

Roles are identified by URL. Platform role URLs follow the layout
``<cell_url>__role/<box_name>/<role_name>`` where the box name ``__``
denotes the cell's main box.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

ROLE_PATH_SEGMENT = "__role"
MAIN_BOX = "__"


class RoleReference(BaseModel):
    """URL uniquely identifying a role."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: HttpUrl = Field(description="Role URL")

    def _segments(self) -> list[str]:
        path = self.url.path or ""
        return [segment for segment in path.split("/") if segment]

    @property
    def name(self) -> str | None:
        """Role name (last path segment)."""
        segments = self._segments()
        return segments[-1] if segments else None

    @property
    def box_name(self) -> str | None:
        """Box the role belongs to, None for the main box or a non-role URL."""
        segments = self._segments()
        if len(segments) < 3 or segments[-3] != ROLE_PATH_SEGMENT:
            return None
        box = segments[-2]
        return None if box == MAIN_BOX else box

    @property
    def cell_url(self) -> str | None:
        """URL of the cell defining the role, None if the path is not a role path."""
        segments = self._segments()
        if len(segments) < 3 or segments[-3] != ROLE_PATH_SEGMENT:
            return None
        url = str(self.url)
        return url[: url.rindex(f"/{ROLE_PATH_SEGMENT}/") + 1]

    def __str__(self) -> str:
        return str(self.url)


__all__ = ["MAIN_BOX", "ROLE_PATH_SEGMENT", "RoleReference"]
