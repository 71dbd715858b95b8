# File: landpro/models/analysis.py

"""
AI land analysis records.

``Analysis`` stores the validated AnalysisResult payload for a project; the
most recent row by ``created_at`` is the current one. Editing the project's
boundary flips ``stale`` until the analysis is re-run.

``AnalysisJob`` is the queue-less record written by parcel preprocessing.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from landpro.models.base import Base, gen_uuid, utcnow


class Analysis(Base):
    __tablename__ = "analysis"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False
    )

    land_classification: Mapped[Optional[dict]] = mapped_column(JSON)
    hazards: Mapped[Optional[list]] = mapped_column(JSON)
    path: Mapped[Optional[dict]] = mapped_column(JSON)

    intent: Mapped[Optional[str]] = mapped_column(String(20))
    stale: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class AnalysisJob(Base):
    __tablename__ = "analysis_jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
