"""
Runtime Configuration

Builds the immutable application configuration from environment variables.
The resulting AppConfig is created once at startup and handed to every
component at construction; nothing reads os.environ at request time.
"""
import os
import logging
import tempfile
from typing import Mapping, Optional

from pydantic import BaseModel

from constants import StorageBackendName, UploadKind, UploadLimits, AuthConfig
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Immutable configuration shared by the upload pipeline"""

    database_url: str = "sqlite:///./tubely.db"

    # Auth
    jwt_secret: str
    jwt_algorithm: str = AuthConfig.DEFAULT_ALGORITHM

    # Local storage / URL construction
    assets_root: str = "./assets"
    staging_dir: str = tempfile.gettempdir()
    public_host: str = "localhost"
    port: int = 8091
    public_base_url: Optional[str] = None

    # Backend selection
    storage_backend: StorageBackendName = StorageBackendName.LOCAL
    thumbnail_storage_backend: Optional[StorageBackendName] = None
    video_storage_backend: Optional[StorageBackendName] = None

    # S3
    s3_bucket: Optional[str] = None
    s3_region: str = "us-east-1"
    s3_endpoint: Optional[str] = None

    # Size ceilings
    max_thumbnail_bytes: int = UploadLimits.MAX_THUMBNAIL_BYTES
    max_video_bytes: int = UploadLimits.MAX_VIDEO_BYTES

    # Logging
    log_dir: str = "./logs"
    log_level: str = "INFO"

    class Config:
        frozen = True

    @property
    def base_url(self) -> str:
        """Externally reachable base URL used for local asset locators"""
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        return f"http://{self.public_host}:{self.port}"

    def backend_for(self, kind: UploadKind) -> StorageBackendName:
        """Storage backend configured for an upload kind"""
        override = (
            self.thumbnail_storage_backend if kind is UploadKind.THUMBNAIL
            else self.video_storage_backend
        )
        return override or self.storage_backend

    def max_bytes_for(self, kind: UploadKind) -> int:
        """Upload size ceiling for an upload kind"""
        if kind is UploadKind.THUMBNAIL:
            return self.max_thumbnail_bytes
        return self.max_video_bytes

    def check_consistency(self) -> "AppConfig":
        """
        Check cross-field consistency.

        Raises:
            ConfigurationError: If the configuration cannot be used

        Returns:
            self, for chaining
        """
        if not self.jwt_secret:
            raise ConfigurationError("JWT secret is not configured", missing_keys=["JWT_SECRET"])

        uses_s3 = any(
            self.backend_for(kind) is StorageBackendName.S3 for kind in UploadKind
        )
        if uses_s3 and not self.s3_bucket:
            raise ConfigurationError(
                "S3 storage backend selected but no bucket configured",
                missing_keys=["S3_BUCKET"]
            )

        for name in ("max_thumbnail_bytes", "max_video_bytes"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be a positive number of bytes")

        return self


def _env_backend(env: Mapping[str, str], name: str) -> Optional[StorageBackendName]:
    value = env.get(name)
    if not value:
        return None
    try:
        return StorageBackendName(value.strip().lower())
    except ValueError:
        choices = ", ".join(b.value for b in StorageBackendName)
        raise ConfigurationError(f"{name} must be one of: {choices} (got {value!r})")


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer (got {value!r})")


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build the configuration from environment variables.

    Args:
        environ: Mapping to read instead of os.environ (used by tests)

    Returns:
        Validated, frozen AppConfig

    Raises:
        ConfigurationError: If a value is missing or malformed
    """
    env = os.environ if environ is None else environ

    config = AppConfig(
        database_url=env.get("DATABASE_URL", "sqlite:///./tubely.db"),
        jwt_secret=env.get("JWT_SECRET", ""),
        jwt_algorithm=env.get("JWT_ALG", AuthConfig.DEFAULT_ALGORITHM),
        assets_root=env.get("ASSETS_ROOT", "./assets"),
        staging_dir=env.get("STAGING_DIR") or tempfile.gettempdir(),
        public_host=env.get("HOST", "localhost"),
        port=_env_int(env, "PORT", 8091),
        public_base_url=env.get("PUBLIC_BASE_URL") or None,
        storage_backend=_env_backend(env, "STORAGE_BACKEND") or StorageBackendName.LOCAL,
        thumbnail_storage_backend=_env_backend(env, "THUMBNAIL_STORAGE_BACKEND"),
        video_storage_backend=_env_backend(env, "VIDEO_STORAGE_BACKEND"),
        s3_bucket=env.get("S3_BUCKET") or None,
        s3_region=env.get("S3_REGION", "us-east-1"),
        s3_endpoint=env.get("S3_ENDPOINT") or None,
        max_thumbnail_bytes=_env_int(env, "MAX_THUMBNAIL_BYTES", UploadLimits.MAX_THUMBNAIL_BYTES),
        max_video_bytes=_env_int(env, "MAX_VIDEO_BYTES", UploadLimits.MAX_VIDEO_BYTES),
        log_dir=env.get("LOG_DIR", "./logs"),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )

    config.check_consistency()
    logger.info(
        f"Configuration loaded: thumbnails -> {config.backend_for(UploadKind.THUMBNAIL).value}, "
        f"videos -> {config.backend_for(UploadKind.VIDEO).value}"
    )
    return config

