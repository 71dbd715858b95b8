# File: landpro/services/common.py

"""
Helpers shared by the service layer: optimistic version checks and a
commit that turns a concurrent write into a 409.
"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from landpro.core.errors import ConflictError

logger = logging.getLogger("landpro.services")


def ensure_version(obj, expected: int) -> None:
    """Reject an update made against an out-of-date copy of ``obj``."""
    if obj.version != expected:
        raise ConflictError()


def commit(db: Session) -> None:
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.info("Concurrent update detected, rolling back")
        raise ConflictError()
