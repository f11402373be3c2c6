import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from habitgrid.models import Base

logger = logging.getLogger(__name__)


def _normalize_database_url(raw_url: str) -> str:
    url = (raw_url or "").strip()
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://") :]
    if url.startswith("postgresql://") and "+psycopg" not in url:
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def build_engine(raw_url: str) -> Engine:
    url = _normalize_database_url(raw_url)
    if not url.startswith("sqlite"):
        return create_engine(url, future=True, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # single shared connection, every new one would open an empty database
        return create_engine(url, future=True, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured on %s", engine.url.render_as_string(hide_password=True))


def ping(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
