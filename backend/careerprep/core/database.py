"""
Database Setup (SQLAlchemy)

- engine: connection to the configured database
- SessionLocal: per-request session factory
- Base: declarative base for all ORM models
- get_db(): FastAPI dependency yielding a session
"""
from typing import Generator

from sqlalchemy import JSON, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from careerprep.core.config import settings


# JSON column that becomes JSONB on PostgreSQL
JSONType = JSON().with_variant(JSONB(), "postgresql")

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
