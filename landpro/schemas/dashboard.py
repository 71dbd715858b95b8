# File: landpro/schemas/dashboard.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    projects: int
    clients: int
    quotes: int
    pending_quotes: int
    approved_quotes: int
    completed_jobs: int
    invoices: int
    outstanding_invoices: int
    quoted_total: Decimal
    revenue_paid: Decimal
    revenue_outstanding: Decimal


# ---------- admin ----------

class UserQuoteCount(BaseModel):
    user_id: str
    email: str
    business_name: Optional[str] = None
    quote_count: int


class RecentQuote(BaseModel):
    id: str
    client_name: str
    total_cost: Decimal
    status: str
    created_at: datetime
    business_name: Optional[str] = None


class AdminMetrics(BaseModel):
    total_users: int
    total_quotes: int
    average_quotes_per_user: int
    users: List[UserQuoteCount]
    recent_quotes: List[RecentQuote]


class PublicConfig(BaseModel):
    mapbox_token: Optional[str] = None
