"""
Custom exception classes for the application.

Every failure of the upload pipeline is raised as one of these, so that the
HTTP layer can choose a status category (bad input, unauthenticated,
forbidden, not found, server side) without inspecting messages.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when an upload is malformed or not allowed (content type, id, size)"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class PayloadTooLargeError(ValidationError):
    """Raised when an upload stream exceeds the configured size ceiling"""

    def __init__(self, limit_bytes: int):
        self.limit_bytes = limit_bytes
        ApplicationError.__init__(
            self,
            f"Upload exceeds the maximum allowed size of {limit_bytes} bytes",
            {"max_bytes": limit_bytes}
        )


class AuthError(ApplicationError):
    """Raised when a credential is missing or cannot be verified"""


class AuthorizationError(ApplicationError):
    """Raised when a verified requester does not own the target video"""

    def __init__(self, video_id: str, requester_id: str):
        details = {"video_id": video_id, "requester_id": requester_id}
        super().__init__(f"User {requester_id} does not own video {video_id}", details)


class NotFoundError(ApplicationError):
    """Raised when a video record does not exist"""

    def __init__(self, video_id: str):
        super().__init__(f"Video {video_id} not found", {"video_id": video_id})


class StorageError(ApplicationError):
    """Raised when staging or committing asset bytes fails"""

    def __init__(self, operation: str, message: str, key: str | None = None):
        details = {"operation": operation}
        if key:
            details["key"] = key
        super().__init__(message, details)


class PersistenceError(ApplicationError):
    """Raised when the metadata store cannot be written"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
