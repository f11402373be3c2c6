import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from habitgrid.errors import PersistenceUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def persistence_guard(db: Session, action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Database error while trying to %s: %s", action, exc)
        raise PersistenceUnavailable(f"Failed to {action}") from exc
