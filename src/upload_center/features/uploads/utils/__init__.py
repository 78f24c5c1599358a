"""Upload utilities."""

from .validation import validate_candidate

__all__ = ["validate_candidate"]
