import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import QueuePool

from config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Some hosting environments accidentally prepend "DATABASE_URL=" to the value
# (e.g. when copying `export DATABASE_URL=...`). Strip that prefix if present
PREFIX = "DATABASE_URL="


def normalize_database_url(url: str) -> str:
    """
    Turn a provider-issued connection string into one SQLAlchemy accepts.
    Heroku/Render style `postgres://` URLs are mapped to the psycopg2 dialect.
    """
    url = url.strip()
    if url.startswith(PREFIX):
        url = url[len(PREFIX):].strip()
    if url.startswith("postgres://"):
        url = "postgresql+psycopg2://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+psycopg2://" + url[len("postgresql://"):]
    return url


def build_sqlite_engine(path: str) -> Engine:
    db_path = Path(path).expanduser().resolve()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    url = f"sqlite:///{db_path.as_posix()}"
    logger.info("Database configured with SQLite at %s", db_path)
    # SQLite has different pooling requirements
    return create_engine(
        url,
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
    )


def postgres_connect_args(ssl: bool, root_cert: Optional[str] = None) -> dict:
    """libpq TLS options: verify the server when a CA bundle is given, otherwise encrypt only."""
    if root_cert:
        return {"sslmode": "verify-full", "sslrootcert": root_cert}
    if ssl:
        return {"sslmode": "require"}
    return {}


def build_postgres_engine(settings: Settings) -> Engine:
    engine = create_engine(
        normalize_database_url(settings.DATABASE_URL),
        echo=False,
        future=True,
        pool_pre_ping=True,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_args=postgres_connect_args(settings.PG_SSL, settings.PG_SSL_ROOT_CERT),
    )
    # Log connection pool status for observability
    logger.info(
        "Database connection pool configured: size=%s, max_overflow=%s",
        settings.DB_POOL_SIZE,
        settings.DB_MAX_OVERFLOW,
    )
    return engine
