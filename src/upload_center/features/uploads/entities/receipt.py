"""Result of a confirmed upload."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ....utils.formatting import parse_timestamp


@dataclass(frozen=True)
class UploadReceipt:
    upload_id: int
    filename: str
    size: int
    upload_time: Optional[datetime]
    file_location: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadReceipt":
        return cls(
            upload_id=int(data["upload_id"]),
            filename=str(data["filename"]),
            size=int(data.get("size") or 0),
            upload_time=parse_timestamp(data.get("upload_time")),
            file_location=str(data.get("file_location") or ""),
        )
