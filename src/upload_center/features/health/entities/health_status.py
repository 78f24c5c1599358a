"""Backend health snapshot."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

RUNNING = "running"


@dataclass(frozen=True)
class HealthStatus:
    server: str
    debug_mode: bool
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_online(self) -> bool:
        return self.server == RUNNING

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HealthStatus":
        return cls(server=str(data.get("server") or ""), debug_mode=bool(data.get("debug_mode", False)))
