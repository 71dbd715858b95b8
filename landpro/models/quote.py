# File: landpro/models/quote.py

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landpro.models.base import Base, TimestampMixin, gen_uuid, status_check

QUOTE_STATUSES = ("pending", "sent", "approved", "declined", "completed")

# Allowed moves of the quote lifecycle; anything else is rejected.
QUOTE_TRANSITIONS = {
    "pending": {"sent", "approved", "declined"},
    "sent": {"approved", "declined"},
    "approved": {"completed"},
    "declined": set(),
    "completed": set(),
}


class Quote(TimestampMixin, Base):
    __tablename__ = "quotes"
    __table_args__ = (status_check(QUOTE_STATUSES, "quotes"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    client_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("clients.id", ondelete="SET NULL"), index=True)
    project_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("projects.id", ondelete="SET NULL"))

    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    job_description: Mapped[str] = mapped_column(Text, nullable=False)
    property_size: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    property_unit: Mapped[Optional[str]] = mapped_column(String(10))

    labor_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    material_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    equipment_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    total_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)

    completion_time: Mapped[Optional[str]] = mapped_column(String(50))
    material_notes: Mapped[Optional[str]] = mapped_column(Text)

    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def recompute_total(self) -> None:
        self.total_cost = (
            Decimal(self.labor_cost or 0)
            + Decimal(self.material_cost or 0)
            + Decimal(self.equipment_cost or 0)
        )
