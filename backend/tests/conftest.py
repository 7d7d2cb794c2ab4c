import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import io
import pytest
from datetime import datetime, timedelta

from config.settings import AppConfig
from constants import UploadKind
from database import create_db_engine, create_session_factory
from init_db import init_database
from models import Video
from repositories.video_repository import VideoRepository
from services.interfaces import IStorageBackend

JWT_SECRET = "test-secret"


class RecordingBackend(IStorageBackend):
    """In-memory storage backend that remembers every commit"""

    def __init__(self, fail_with: Exception | None = None):
        self.objects: dict[str, tuple[str, bytes]] = {}
        self.commits: list[str] = []
        self.fail_with = fail_with

    def commit(self, key, media_type, byte_source):
        if self.fail_with is not None:
            raise self.fail_with
        self.objects[key] = (media_type, byte_source.read())
        self.commits.append(key)
        return f"memory://assets/{key}"


class BrokenStream(io.RawIOBase):
    """Stream that dies after handing out some bytes, like a dropped client"""

    def __init__(self, good_bytes: bytes):
        self.remaining = good_bytes

    def readable(self):
        return True

    def read(self, size=-1):
        if self.remaining:
            chunk, self.remaining = self.remaining, b""
            return chunk
        raise ConnectionResetError("client disconnected")


class StepClock:
    """Clock that advances one second per call"""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def db_session():
    """Create in-memory database for testing"""
    engine = create_db_engine('sqlite:///:memory:')
    init_database(engine)
    SessionLocal = create_session_factory(engine)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def repository(db_session):
    return VideoRepository(db_session)


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        database_url='sqlite:///:memory:',
        jwt_secret=JWT_SECRET,
        assets_root=str(tmp_path / "assets"),
        staging_dir=str(tmp_path / "staging"),
        log_dir=str(tmp_path / "logs"),
        max_thumbnail_bytes=1024,
        max_video_bytes=4096,
    )


@pytest.fixture
def staging_dir(app_config):
    return Path(app_config.staging_dir)


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def backends(backend):
    return {kind: backend for kind in UploadKind}


@pytest.fixture
def video_v1(db_session):
    """Video 'v1' owned by user 'u1'"""
    created = datetime(2024, 1, 1, 9, 0, 0)
    row = Video(
        id='v1',
        title='Boots demo',
        description='how to lace boots',
        user_id='u1',
        created_at=created,
        updated_at=created,
    )
    db_session.add(row)
    db_session.commit()
    return row
