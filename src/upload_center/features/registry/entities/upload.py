"""Upload record domain entity.

A stored file as listed by the backend. ``download_count`` is owned by the
server; the client never changes it locally.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ....utils.formatting import parse_timestamp


@dataclass(frozen=True)
class Upload:
    id: int
    filename: str
    size: int
    upload_time: Optional[datetime]
    user_id: str
    file_location: str
    download_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Upload":
        return cls(
            id=int(data["id"]),
            filename=str(data["filename"]),
            size=int(data.get("size") or 0),
            upload_time=parse_timestamp(data.get("upload_time")),
            user_id=str(data.get("user_id") or ""),
            file_location=str(data.get("file_location") or ""),
            download_count=int(data.get("download_count") or 0),
        )
