"""Utility helpers for upload-center."""

from .error_handling import operation_error_handler, log_operation
from .formatting import format_file_size, format_size_limit, format_timestamp, parse_timestamp

__all__ = [
    "operation_error_handler",
    "log_operation",
    "format_file_size",
    "format_size_limit",
    "format_timestamp",
    "parse_timestamp",
]
