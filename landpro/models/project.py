# File: landpro/models/project.py

"""
Project model.

A project groups a land boundary (GeoJSON Polygon), its acreage and the AI
analyses run against it. Acreage is always recomputed by the server from the
boundary; clients never write it directly.
"""

from typing import Optional

from sqlalchemy import JSON, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from landpro.models.base import Base, TimestampMixin, gen_uuid, status_check

PROJECT_STATUSES = ("draft", "active", "completed")


class Project(TimestampMixin, Base):
    __tablename__ = "projects"
    __table_args__ = (status_check(PROJECT_STATUSES, "projects"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    boundary: Mapped[Optional[dict]] = mapped_column(JSON)
    acreage: Mapped[Optional[float]] = mapped_column(Float)

    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
