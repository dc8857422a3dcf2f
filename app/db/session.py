import logging
from pathlib import Path

import psycopg
from psycopg import sql
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import settings

_LOG = logging.getLogger("app.db")

ROOT_DIR = Path(__file__).resolve().parents[2]


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"echo": settings.SQL_ECHO, "connect_args": {"check_same_thread": False}}
    return {
        "echo": settings.SQL_ECHO,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
    }


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _libpq_dsn(url) -> str:
    return url.set(drivername="postgresql").render_as_string(hide_password=False)


def ensure_database(database_url: str | None = None) -> bool:
    """Create the target PostgreSQL database when it does not exist yet.

    Connects to the server's maintenance database, so the configured role
    needs CREATEDB. Returns True when a database was created.
    """
    url = make_url(database_url or settings.DATABASE_URL)
    if not url.drivername.startswith("postgresql") or not url.database:
        return False
    admin_dsn = _libpq_dsn(url.set(database="postgres"))
    with psycopg.connect(admin_dsn, autocommit=True) as conn:
        exists = conn.execute(
            "SELECT 1 FROM pg_database WHERE datname = %s", (url.database,)
        ).fetchone()
        if exists:
            return False
        conn.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(url.database)))
    _LOG.info("created database %s", url.database)
    return True


def alembic_config(database_url: str | None = None):
    from alembic.config import Config

    cfg = Config(str(ROOT_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    cfg.attributes["database_url"] = database_url or settings.DATABASE_URL
    return cfg


def run_migrations(database_url: str | None = None) -> None:
    from alembic import command

    command.upgrade(alembic_config(database_url), "head")
    _LOG.info("database schema is at head")
