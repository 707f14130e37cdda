"""
Database configuration and session management.

This module sets up the SQLAlchemy engine and session factory. The default
backing store is a local SQLite file (data.sqlite).
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Handle both package imports and standalone imports
try:
    from .config import get_settings
except ImportError:
    from config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()
DATABASE_URL = settings.database_url


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    Pool sizing only applies to server databases; SQLite uses its own
    connection pooling.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise each connection gets its own database
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
    # - pool_pre_ping: Verify connections are alive before using them
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        echo=echo,
    )


engine = create_db_engine(DATABASE_URL, echo=settings.sql_debug)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """
    Initialize the database by creating all tables.

    A ``data`` table left over from the older register format (which had
    on_notice_from/on_notice_to columns) is dropped and recreated.
    """
    # Import models to ensure they are registered with Base
    from . import models_db  # noqa: F401

    bind = bind or engine
    table_name = models_db.ApplicationRecord.__tablename__
    inspector = inspect(bind)
    if inspector.has_table(table_name):
        columns = {column["name"] for column in inspector.get_columns(table_name)}
        if "on_notice_from" in columns:
            logger.info("Dropping legacy [%s] table with on_notice_from column", table_name)
            models_db.ApplicationRecord.__table__.drop(bind)

    Base.metadata.create_all(bind=bind)
