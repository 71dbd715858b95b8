"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

import logging

from sqlalchemy.engine import Engine

from landpro.db.session import engine as default_engine
from landpro.models.base import Base
from landpro.models import analysis, client, invoice, lead, project, quote, user, webhook_event  # noqa: F401

logger = logging.getLogger("landpro.db")


def init_db(engine: Engine | None = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    bind = engine or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables initialized")
