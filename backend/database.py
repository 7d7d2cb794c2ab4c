from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from fastapi import Request

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for the metadata store.

    SQLite connections get WAL mode and a busy timeout so API threads and
    upload requests can share the file. In-memory databases share a single
    connection so every session sees the same tables.
    """
    is_sqlite = database_url.startswith("sqlite")
    in_memory = is_sqlite and (":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"))

    kwargs = {"echo": False, "pool_pre_ping": True}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    if in_memory:
        kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def get_db(request: Request):
    """Dependency for FastAPI routes"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
