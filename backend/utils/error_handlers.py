"""
Error handling decorators and utilities for API endpoints.

Translates the application's exception taxonomy into HTTP status codes in
one place, so routes only deal with the happy path.
"""

import inspect
import logging
from functools import wraps
from typing import Callable

from fastapi import HTTPException

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    AuthError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    PayloadTooLargeError,
    PersistenceError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Map an exception to the HTTPException returned to the client.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Thumbnail upload")
        error: Exception raised by the operation

    Returns:
        HTTPException with the matching status category
    """
    if isinstance(error, PayloadTooLargeError):
        logger.warning(f"{operation_name} - Payload too large: {error.message}")
        return HTTPException(status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE, detail=error.message)
    if isinstance(error, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {error.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=error.message)
    if isinstance(error, AuthError):
        logger.warning(f"{operation_name} - Authentication error: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail=error.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(error, AuthorizationError):
        logger.warning(f"{operation_name} - Authorization error: {error.message}")
        return HTTPException(status_code=HTTPStatus.FORBIDDEN, detail="You do not own this video")
    if isinstance(error, NotFoundError):
        logger.warning(f"{operation_name} - Not found: {error.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Couldn't find video with such id")
    if isinstance(error, StorageError):
        logger.error(f"{operation_name} - Storage error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Storage operation failed: {error.message}",
        )
    if isinstance(error, PersistenceError):
        logger.error(f"{operation_name} - Persistence error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {error.message}",
        )
    if isinstance(error, ConfigurationError):
        logger.error(f"{operation_name} - Configuration error: {error.message}", exc_info=error)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=error.message)
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=error)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {error.message}",
        )

    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=error)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support.",
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle application errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation

    Example:
        @router.post("/thumbnail_upload/{video_id}")
        @handle_api_errors("Thumbnail upload")
        def upload_thumbnail(...):
            return service.upload_thumbnail(...)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        # Return appropriate wrapper based on whether the function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
