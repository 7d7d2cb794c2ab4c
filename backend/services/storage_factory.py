"""
Selection of storage backends from configuration.
"""
from config.settings import AppConfig
from constants import StorageBackendName, UploadKind
from exceptions import ConfigurationError
from services.interfaces import IStorageBackend
from services.local_storage import LocalStorageBackend
from services.s3_storage import S3StorageBackend


def create_storage_backend(name: StorageBackendName, config: AppConfig) -> IStorageBackend:
    """
    Build the backend named by configuration.

    Raises:
        ConfigurationError: If the backend is unknown or under-configured
    """
    if name is StorageBackendName.LOCAL:
        return LocalStorageBackend(config.assets_root, config.base_url)

    if name is StorageBackendName.S3:
        if not config.s3_bucket:
            raise ConfigurationError("S3 storage backend selected but no bucket configured", ["S3_BUCKET"])
        return S3StorageBackend(config.s3_bucket, config.s3_region, endpoint_url=config.s3_endpoint)

    raise ConfigurationError(f"Unknown storage backend: {name}")


def create_storage_backends(config: AppConfig) -> dict[UploadKind, IStorageBackend]:
    """
    One backend per upload kind.

    Kinds configured with the same backend share one instance.
    """
    built: dict[StorageBackendName, IStorageBackend] = {}
    backends = {}
    for kind in UploadKind:
        name = config.backend_for(kind)
        if name not in built:
            built[name] = create_storage_backend(name, config)
        backends[kind] = built[name]
    return backends
