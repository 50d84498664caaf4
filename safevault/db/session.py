"""
Database engine and the per-request session dependency.
"""

from typing import Generator

from sqlmodel import Session, create_engine

from safevault.core.config import settings

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=settings.DEBUG,
    pool_pre_ping=not settings.is_sqlite,
    connect_args=connect_args,
)


def get_session() -> Generator[Session, None, None]:
    """Yield one session per request; it is closed whatever the outcome."""
    with Session(engine) as session:
        yield session
