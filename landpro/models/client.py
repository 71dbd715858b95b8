# File: landpro/models/client.py

from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landpro.models.base import Base, TimestampMixin, gen_uuid, status_check

CLIENT_STATUSES = ("active", "inactive")


class Client(TimestampMixin, Base):
    __tablename__ = "clients"
    __table_args__ = (status_check(CLIENT_STATUSES, "clients"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    landscaper_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)

    # Portal login linked to this client record, if any
    client_user_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("users.id"), index=True)

    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    address: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)
