from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, DeclarativeBase
from .config import settings

# SQLite (local) and Postgres compatible engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

class Base(DeclarativeBase):
    pass

@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Short-lived session for startup and maintenance scripts."""
    db = factory()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None):
    # late import so both tables are registered on Base.metadata
    from ..models.location import LocationRow
    from ..models.railcard import RailcardRow
    Base.metadata.create_all(bind=bind or engine)
