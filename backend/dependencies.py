"""
Dependency injection providers for FastAPI.

Long-lived collaborators (configuration, authenticator, storage backends,
session factory) are built once in main.create_app() and kept on app.state;
these providers hand them to routes and build the per-request repository and
upload service around them. Tests override app.state or the providers
themselves.
"""

from typing import Mapping, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from config.settings import AppConfig
from constants import UploadKind
from database import get_db
from exceptions import AuthError
from repositories.video_repository import VideoRepository
from services.auth_service import get_bearer_token
from services.interfaces import IAuthenticator, IStorageBackend
from services.upload_service import UploadService
from utils.error_handlers import to_http_exception


def get_app_config(request: Request) -> AppConfig:
    """Immutable configuration the app was created with."""
    return request.app.state.config


def get_authenticator(request: Request) -> IAuthenticator:
    return request.app.state.authenticator


def get_storage_backends(request: Request) -> Mapping[UploadKind, IStorageBackend]:
    return request.app.state.storage_backends


def get_video_repository(db: Session = Depends(get_db)) -> VideoRepository:
    """
    Factory function for creating VideoRepository instances.

    Args:
        db: Database session (injected)

    Returns:
        VideoRepository bound to the request's session
    """
    return VideoRepository(db)


def get_upload_service(
    config: AppConfig = Depends(get_app_config),
    repository: VideoRepository = Depends(get_video_repository),
    backends: Mapping[UploadKind, IStorageBackend] = Depends(get_storage_backends),
) -> UploadService:
    """
    Factory function for creating UploadService instances.

    Returns:
        UploadService wired to the request's repository
    """
    return UploadService(config, repository, backends)


def get_current_user_id(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    authenticator: IAuthenticator = Depends(get_authenticator),
) -> str:
    """
    Identity of the caller from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    try:
        return authenticator.verify(get_bearer_token(authorization))
    except AuthError as e:
        raise to_http_exception("Authentication", e)
