"""
Structured Logging Utilities

Provides utilities for adding structured context to log messages,
so every line logged while an upload is in flight carries its identifiers.
"""

import inspect
import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Arguments picked up by log_operation when present in the wrapped call
CONTEXT_KEYS = ("video_id", "requester_id", "user_id", "storage_key")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Asset committed", extra={
            "video_id": video_id,
            "storage_key": key,
        })
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Merge the current context with extra.

        Args:
            extra: Additional context dict

        Returns:
            Merged context dict
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def _format(self, message: str, context: Dict[str, Any]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{message} [{pairs}]"

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        context = self._add_context(extra)
        self.logger.debug(self._format(message, context), extra=context)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        context = self._add_context(extra)
        self.logger.info(self._format(message, context), extra=context)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        context = self._add_context(extra)
        self.logger.warning(self._format(message, context), extra=context)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        context = self._add_context(extra)
        self.logger.error(self._format(message, context), extra=context, exc_info=exc_info)


@contextmanager
def logging_context(**kwargs):
    """Scope a logging context to a with-block, restoring the previous one on exit."""
    context = _logging_context.get().copy()
    context.update(kwargs)
    token = _logging_context.set(context)
    try:
        yield
    finally:
        _logging_context.reset(token)


def log_operation(operation_name: str):
    """
    Decorator to log operation start/end with structured context.

    Identifiers named in CONTEXT_KEYS are picked from the call's arguments,
    positional or keyword.

    Example:
        @log_operation("upload_thumbnail")
        def upload_thumbnail(self, video_id, requester_id, ...):
            ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            try:
                bound = signature.bind_partial(*args, **kwargs).arguments
            except TypeError:
                bound = kwargs
            for key in CONTEXT_KEYS:
                if key in bound:
                    context[key] = bound[key]

            with logging_context(**context):
                logger.info(f"Starting {operation_name}")
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"Failed {operation_name}",
                        extra={"error": str(e), "error_type": type(e).__name__},
                    )
                    raise
                logger.info(f"Completed {operation_name}")
                return result

        return wrapper

    return decorator
