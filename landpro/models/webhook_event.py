# File: landpro/models/webhook_event.py

"""
Payment-provider webhook deliveries already applied.

The provider's event id is the primary key, so inserting a row doubles as
the "seen before?" check: a second delivery of the same event fails the
insert and the handler skips it.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from landpro.models.base import Base, utcnow


class WebhookEvent(Base):
    __tablename__ = "webhook_events"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    received_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
