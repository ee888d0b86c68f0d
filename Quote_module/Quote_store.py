"""
Quote storage over one of two interchangeable engines.

The engine is picked once by create_quote_store(); everything above this
module talks to the QuoteStore interface and never checks which one it got.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from config import Settings
from database import build_postgres_engine, build_sqlite_engine
from errors import StorageError

from .Quote_model import Quote
from .Quote_crud import create_quote, delete_quote, list_quotes

logger = logging.getLogger(__name__)


class QuoteStore:
    """
    Persistence for quotes. Subclasses only decide how the engine is built.
    Every call runs in its own session and raises StorageError on failure,
    after rolling back, so callers never see a half-applied write.
    """

    engine_name = "base"

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            future=True,
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"{self.engine_name} query failed: {e}", exc_info=True)
            raise StorageError(str(e)) from e
        finally:
            db.close()

    def initialize(self) -> None:
        """Create the quotes table when it does not exist yet. Safe to call on every start."""
        try:
            Quote.__table__.create(bind=self.engine, checkfirst=True)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize {self.engine_name} storage: {e}")
            raise StorageError(str(e)) from e
        logger.info(f"Storage ready ({self.engine_name}), table '{Quote.__tablename__}' present")

    def table_exists(self) -> bool:
        try:
            return inspect(self.engine).has_table(Quote.__tablename__)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def insert(self, values: dict) -> Quote:
        with self.session() as db:
            return create_quote(db, values)

    def list_all(self) -> list[Quote]:
        with self.session() as db:
            return list_quotes(db)

    def delete_by_id(self, quote_id: int) -> bool:
        with self.session() as db:
            return delete_quote(db, quote_id)

    def dispose(self) -> None:
        self.engine.dispose()


class SqliteQuoteStore(QuoteStore):
    """Embedded file database, used when no DATABASE_URL is configured."""

    engine_name = "sqlite"

    def __init__(self, path: str):
        self.path = path
        super().__init__(build_sqlite_engine(path))


class PostgresQuoteStore(QuoteStore):
    """Networked PostgreSQL reached through DATABASE_URL."""

    engine_name = "postgres"

    def __init__(self, settings: Settings):
        super().__init__(build_postgres_engine(settings))


def create_quote_store(settings: Settings) -> QuoteStore:
    """Pick the storage engine for this process from configuration."""
    if settings.uses_postgres:
        return PostgresQuoteStore(settings)
    return SqliteQuoteStore(settings.SQLITE_PATH)
