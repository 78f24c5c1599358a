"""Location domain entity.

A named file-system path scoped to one Application. Ownership is by
application id, never by object reference; ``path`` is opaque and not
checked for existence.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Location:
    """Upload target inside an Application."""

    id: int
    application_id: int
    location_name: str
    path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any], application_id: int) -> "Location":
        """Build from a backend payload; the backend omits the owning application id."""
        return cls(
            id=int(data["id"]),
            application_id=int(data.get("application_id", application_id)),
            location_name=str(data["location_name"]),
            path=str(data["path"]),
        )
