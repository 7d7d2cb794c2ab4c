from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from typing import Mapping, Optional
from pathlib import Path
from logging.handlers import RotatingFileHandler
import logging
import sys

from api import uploads, videos
from config.settings import AppConfig, load_config
from constants import LoggingConfig, StorageBackendName, UploadKind
from database import create_db_engine, create_session_factory
from init_db import init_database
from services.auth_service import JWTAuthenticator
from services.interfaces import IAuthenticator, IStorageBackend
from services.storage_factory import create_storage_backends
from utils.body_limits import UploadBodyLimitMiddleware, upload_body_limits

logger = logging.getLogger(__name__)

_logging_configured = False


def configure_logging(config: AppConfig):
    """Rotating file handler plus console output on the root logger"""
    global _logging_configured
    if _logging_configured:
        return

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LoggingConfig.LOG_FILENAME

    log_formatter = logging.Formatter(LoggingConfig.FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LoggingConfig.MAX_BYTES,
        backupCount=LoggingConfig.BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    _logging_configured = True
    logger.info(f"Logging initialized: {log_file}")


def create_app(
    config: Optional[AppConfig] = None,
    authenticator: Optional[IAuthenticator] = None,
    storage_backends: Optional[Mapping[UploadKind, IStorageBackend]] = None,
    setup_logging: bool = True,
) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Configuration; loaded from the environment when omitted
        authenticator: Overrides the JWT authenticator
        storage_backends: Overrides the configured backend per upload kind
        setup_logging: Attach file and console log handlers

    Returns:
        FastAPI application
    """
    config = config or load_config()
    if setup_logging:
        configure_logging(config)

    engine = create_db_engine(config.database_url)
    init_database(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan - startup and shutdown"""
        logger.info("Starting upload service...")
        yield
        logger.info("Shutting down upload service...")
        engine.dispose()

    app = FastAPI(title="Tubely Upload API", version="1.0.0", lifespan=lifespan)

    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.authenticator = authenticator or JWTAuthenticator(config.jwt_secret, config.jwt_algorithm)
    app.state.storage_backends = storage_backends or create_storage_backends(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Outermost, so oversized upload bodies are refused before multipart parsing
    app.add_middleware(UploadBodyLimitMiddleware, limits=upload_body_limits(config))

    app.include_router(uploads.router, prefix="/api", tags=["uploads"])
    app.include_router(videos.router, prefix="/api", tags=["videos"])

    @app.get("/api/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "service": "Tubely Upload API",
            "version": "1.0.0"
        }

    # Locally stored assets are served from the same origin
    if any(config.backend_for(kind) is StorageBackendName.LOCAL for kind in UploadKind):
        Path(config.assets_root).mkdir(parents=True, exist_ok=True)
        app.mount("/assets", StaticFiles(directory=config.assets_root), name="assets")

    return app


if __name__ == "__main__":
    import uvicorn

    config = load_config()
    logger.info(f"🚀 Starting Tubely upload API on port {config.port}...")
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.port)
