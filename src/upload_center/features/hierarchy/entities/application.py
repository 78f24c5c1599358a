"""Application domain entity.

Top-level namespace that owns Locations.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Application:
    """Application as assigned by the server.

    ``id`` is server-assigned and stable; ``name`` need not be unique.
    """

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Application":
        return cls(id=int(data["id"]), name=str(data["name"]))
