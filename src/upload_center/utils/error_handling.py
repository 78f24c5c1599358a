"""Standardized error handling utilities for client operations.

Provides decorators for consistent logging and error handling across the
feature services.
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, Dict, Optional

from ..core.exceptions import (
    ValidationError,
    ServerError,
    NetworkError,
    SessionClosedError,
    InvalidStateError,
)

logger = logging.getLogger(__name__)

# Expected failures the caller is told about; logged quietly
DOMAIN_ERRORS = (ValidationError, ServerError, NetworkError, SessionClosedError, InvalidStateError)

CONTEXT_KEYS = ("application_id", "location_id", "upload_id", "name", "filename")


def _collect_context(operation_name: str, func: Callable, args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    context: Dict[str, Any] = {"operation": operation_name, "function": func.__name__}
    try:
        arguments = inspect.signature(func).bind_partial(*args, **kwargs).arguments
    except TypeError:
        arguments = kwargs
    for key in CONTEXT_KEYS:
        if arguments.get(key) is not None:
            context[key] = arguments[key]
    return context


def _format_context(context: Dict[str, Any]) -> str:
    return ", ".join(f"{k}={v}" for k, v in context.items())


def operation_error_handler(
    operation_name: str,
    log_level: int = logging.ERROR,
    reraise: bool = True,
    default_return: Any = None,
):
    """Decorator for standardized error handling on async service methods.

    Args:
        operation_name: Name of the operation for logging
        log_level: Logging level for unexpected errors (default: ERROR)
        reraise: Whether to re-raise the exception (default: True)
        default_return: Value returned instead when not re-raising

    Usage:
        @operation_error_handler("create application")
        async def create_application(self, name):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)

            except DOMAIN_ERRORS as e:
                context = _collect_context(operation_name, func, args, kwargs)
                logger.info(f"{type(e).__name__} in {operation_name}: {e} | Context: {_format_context(context)}")
                if reraise:
                    raise
                return default_return

            except Exception as e:
                context = _collect_context(operation_name, func, args, kwargs)
                logger.log(log_level, f"Failed to {operation_name}: {e} | Context: {_format_context(context)}")
                if reraise:
                    raise
                return default_return

        return wrapper
    return decorator


def log_operation(
    operation_name: str,
    log_level: int = logging.DEBUG,
    include_timing: bool = False,
    include_result_summary: bool = False,
):
    """Decorator for logging the start and end of async service methods.

    Args:
        operation_name: Name of the operation for logging
        log_level: Logging level (default: DEBUG)
        include_timing: Whether to include execution timing
        include_result_summary: Whether to include a result id or count
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            start_time: Optional[float] = time.perf_counter() if include_timing else None
            log_context = _collect_context(operation_name, func, args, kwargs)

            logger.log(log_level, f"Starting {operation_name} | {log_context}")

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                if start_time is not None:
                    log_context["duration_ms"] = f"{(time.perf_counter() - start_time) * 1000:.2f}"
                log_context["error"] = str(e)
                logger.log(log_level, f"Failed {operation_name} | {log_context}")
                raise

            if start_time is not None:
                log_context["duration_ms"] = f"{(time.perf_counter() - start_time) * 1000:.2f}"

            if include_result_summary and result is not None:
                if hasattr(result, "id"):
                    log_context["result_id"] = str(result.id)
                elif isinstance(result, list):
                    log_context["result_count"] = len(result)

            logger.log(log_level, f"Completed {operation_name} | {log_context}")
            return result

        return wrapper
    return decorator
