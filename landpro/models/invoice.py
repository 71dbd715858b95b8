# File: landpro/models/invoice.py

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landpro.models.base import Base, TimestampMixin, gen_uuid, status_check

INVOICE_STATUSES = ("draft", "sent", "paid", "overdue")

# draft -> sent -> paid, with overdue as a detour; paid is terminal.
INVOICE_TRANSITIONS = {
    "draft": {"sent", "paid"},
    "sent": {"paid", "overdue"},
    "overdue": {"paid"},
    "paid": set(),
}


class Invoice(TimestampMixin, Base):
    __tablename__ = "invoices"
    __table_args__ = (status_check(INVOICE_STATUSES, "invoices"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    client_id: Mapped[str] = mapped_column(String(36), ForeignKey("clients.id"), index=True, nullable=False)
    quote_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("quotes.id", ondelete="SET NULL"))

    invoice_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[Optional[date]] = mapped_column(Date)

    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)
    stripe_payment_link: Mapped[Optional[str]] = mapped_column(Text)
    stripe_payment_intent_id: Mapped[Optional[str]] = mapped_column(String(255))
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
