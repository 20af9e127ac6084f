from __future__ import annotations

import logging
from contextlib import closing, contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from .database import Database, get_database

logger = logging.getLogger(__name__)


@contextmanager
def get_db(database: Optional[Database] = None) -> Iterator[Session]:
    """Session for reads; nothing is committed."""
    with closing((database or get_database()).session()) as session:
        yield session


@contextmanager
def transaction_scope(database: Optional[Database] = None) -> Iterator[Session]:
    """Session committed on exit and rolled back if the block raises."""
    with closing((database or get_database()).session()) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            logger.warning("Overlay transaction rolled back")
            raise


__all__ = ["get_db", "transaction_scope"]
