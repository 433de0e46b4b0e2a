"""
Database configuration and session management.
"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from agency_api.config import get_settings


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections are shared across request threads."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    return create_engine(database_url, echo=echo, **kwargs)


settings = get_settings()

# Create SQLAlchemy engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    The request's work is committed once the endpoint returns.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_all_tables(bind: Engine = None) -> None:
    """Create every table and index that does not exist yet."""
    from agency_api.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_all_tables(bind: Engine = None) -> None:
    from agency_api.infrastructure.db import models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)
