"""
Database setup for the place explorer.
Provides SQLAlchemy engine/session utilities for SQLite.
"""
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from settings import settings

Base = declarative_base()


def make_engine(db_path: Optional[str] = None) -> Engine:
    path = Path(db_path or settings.PLACE_EXPLORER_DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    # check_same_thread=False allows usage across FastAPI threads
    return create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})


def init_db(engine: Engine) -> None:
    """Create tables if they don't exist."""
    from repositories import models  # noqa: F401  Ensures models are registered

    Base.metadata.create_all(bind=engine)


def make_session_factory(db_path: Optional[str] = None) -> sessionmaker:
    """Create the engine, ensure the schema, and return a session factory bound to it."""
    engine = make_engine(db_path)
    init_db(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
