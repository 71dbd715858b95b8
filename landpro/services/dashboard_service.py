# File: landpro/services/dashboard_service.py

"""
Read-only aggregates: the landscaper's dashboard summary and the admin
panel metrics.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from landpro.gis.geometry import round_half_up
from landpro.models.client import Client
from landpro.models.invoice import Invoice
from landpro.models.project import Project
from landpro.models.quote import Quote
from landpro.models.user import Profile

RECENT_QUOTES_LIMIT = 10


def _count(db: Session, stmt) -> int:
    return int(db.scalar(select(func.count()).select_from(stmt.subquery())) or 0)


def _sum(db: Session, column, *where) -> Decimal:
    return Decimal(db.scalar(select(func.coalesce(func.sum(column), 0)).where(*where)) or 0)


def dashboard_summary(db: Session, user_id: str) -> dict:
    quotes = select(Quote.id).where(Quote.user_id == user_id)
    invoices = select(Invoice.id).where(Invoice.user_id == user_id)
    outstanding = ("sent", "overdue")

    return {
        "projects": _count(db, select(Project.id).where(Project.user_id == user_id)),
        "clients": _count(db, select(Client.id).where(Client.landscaper_id == user_id)),
        "quotes": _count(db, quotes),
        "pending_quotes": _count(db, quotes.where(Quote.status.in_(("pending", "sent")))),
        "approved_quotes": _count(db, quotes.where(Quote.status == "approved")),
        "completed_jobs": _count(db, quotes.where(Quote.status == "completed")),
        "invoices": _count(db, invoices),
        "outstanding_invoices": _count(db, invoices.where(Invoice.status.in_(outstanding))),
        "quoted_total": _sum(db, Quote.total_cost, Quote.user_id == user_id),
        "revenue_paid": _sum(db, Invoice.amount, Invoice.user_id == user_id, Invoice.status == "paid"),
        "revenue_outstanding": _sum(
            db, Invoice.amount, Invoice.user_id == user_id, Invoice.status.in_(outstanding)
        ),
    }


def admin_metrics(db: Session) -> dict:
    total_users = _count(db, select(Profile.id))
    total_quotes = _count(db, select(Quote.id))
    average = int(round_half_up(total_quotes / total_users)) if total_users else 0

    per_user = db.execute(
        select(Profile.id, Profile.email, Profile.business_name, func.count(Quote.id))
        .outerjoin(Quote, Quote.user_id == Profile.id)
        .group_by(Profile.id, Profile.email, Profile.business_name)
        .order_by(func.count(Quote.id).desc(), Profile.email)
    ).all()

    recent = db.execute(
        select(Quote, Profile.business_name)
        .outerjoin(Profile, Profile.id == Quote.user_id)
        .order_by(Quote.created_at.desc())
        .limit(RECENT_QUOTES_LIMIT)
    ).all()

    return {
        "total_users": total_users,
        "total_quotes": total_quotes,
        "average_quotes_per_user": average,
        "users": [
            {"user_id": uid, "email": email, "business_name": business, "quote_count": count}
            for uid, email, business, count in per_user
        ],
        "recent_quotes": [
            {
                "id": q.id,
                "client_name": q.client_name,
                "total_cost": q.total_cost,
                "status": q.status,
                "created_at": q.created_at,
                "business_name": business,
            }
            for q, business in recent
        ],
    }
