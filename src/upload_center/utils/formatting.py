"""Display helpers for file sizes and timestamps."""

from datetime import datetime
from typing import Optional, Union

from ..config.constants import MEBIBYTE


def format_file_size(size_bytes: int) -> str:
    """Render a byte count the way the upload listing shows it (KB, one decimal)."""
    return f"{size_bytes / 1024:.1f} KB"


def format_size_limit(size_bytes: int) -> str:
    """Render an upload size limit in whole megabytes."""
    return f"{size_bytes // MEBIBYTE}MB"


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the backend; returns None when absent or unparseable."""
    if value is None or isinstance(value, datetime):
        return value
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(value: Union[str, datetime, None]) -> str:
    """Format a timestamp as ``Mon DD, YYYY HH:MM``; unparseable input is returned as-is."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "" if value is None else str(value)
    return parsed.strftime("%b %d, %Y %H:%M")
