"""
Application-wide constants.

This module centralizes the magic strings and numbers used by the upload
pipeline so they are not duplicated across routes and services.
"""
from enum import Enum


class UploadKind(str, Enum):
    """
    The two kinds of asset an upload can attach to a video.

    THUMBNAIL uploads are keyed deterministically by video id and replace the
    previous thumbnail in place. VIDEO uploads get a fresh random key every time.
    """

    THUMBNAIL = 'THUMBNAIL'
    VIDEO = 'VIDEO'

    @property
    def form_field(self) -> str:
        """Multipart form field carrying the file for this kind"""
        return 'thumbnail' if self is UploadKind.THUMBNAIL else 'video'

    @property
    def record_field(self) -> str:
        """VideoRecord attribute holding the asset reference for this kind"""
        return 'thumbnail_ref' if self is UploadKind.THUMBNAIL else 'video_ref'

    @property
    def route_name(self) -> str:
        """Path segment of the upload endpoint for this kind"""
        return 'thumbnail_upload' if self is UploadKind.THUMBNAIL else 'video_upload'


class StorageBackendName(str, Enum):
    """Storage backends selectable through configuration"""

    LOCAL = 'local'
    S3 = 's3'


class UploadLimits:
    """Upload size ceilings and streaming parameters"""

    MAX_THUMBNAIL_BYTES = 10 << 20  # 10 MB
    MAX_VIDEO_BYTES = 1 << 30  # 1 GB
    CHUNK_SIZE = 64 * 1024  # 64KB chunks
    MULTIPART_OVERHEAD_BYTES = 64 * 1024  # boundaries and part headers
    STAGING_PREFIX = 'upload-'


class AssetKeys:
    """Asset key derivation parameters"""

    RANDOM_KEY_BYTES = 32  # 256 bits -> 43 url-safe base64 characters


class MediaTypes:
    """Allowed main/sub types for each upload kind"""

    IMAGE_MAIN_TYPE = 'image'
    VIDEO_MAIN_TYPE = 'video'
    VIDEO_SUB_TYPE = 'mp4'


class AuthConfig:
    """Authentication constants"""

    BEARER_SCHEME = 'bearer'
    DEFAULT_ALGORITHM = 'HS256'
    TOKEN_ISSUER = 'tubely'
    DEFAULT_EXPIRES_MINUTES = 60


class LoggingConfig:
    """Rotating log file parameters"""

    LOG_FILENAME = 'backend.log'
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201

    # Client Errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    REQUEST_ENTITY_TOO_LARGE = 413

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
