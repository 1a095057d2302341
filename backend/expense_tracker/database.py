from pathlib import Path

import structlog
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base

logger = structlog.get_logger(__name__)


class Database:
    """
    Handle on the tracker's SQLite database.

    Constructed explicitly and passed to whoever needs it; there is no
    module-level current database. Foreign key enforcement is deliberately
    left off so that deleting a category orphans its expenses instead of
    failing.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine)

    @classmethod
    def open(cls, db_path: Path) -> "Database":
        """
        Open (or create) the database file at db_path.

        Creates the parent directory and the tables if they don't exist.
        Failure here is fatal to startup and propagates.
        """
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{db_path}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        database = cls(engine)
        database.create_schema()
        logger.info("database_opened", path=str(db_path))
        return database

    @classmethod
    def in_memory(cls) -> "Database":
        """Open a private in-memory database (one shared connection)."""
        engine = create_engine(
            "sqlite://",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        database = cls(engine)
        database.create_schema()
        return database

    def create_schema(self) -> None:
        """Create tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        """Get a new session bound to this database."""
        return self._session_factory()

    def close(self) -> None:
        """Release all pooled connections."""
        self.engine.dispose()


def get_db(request: Request):
    """FastAPI dependency for database sessions."""
    session = request.app.state.database.session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
