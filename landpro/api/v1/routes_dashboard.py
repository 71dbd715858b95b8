# File: landpro/api/v1/routes_dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context, require_admin
from landpro.core.config import settings
from landpro.schemas.dashboard import AdminMetrics, DashboardSummary, PublicConfig
from landpro.services import dashboard_service
from landpro.services.auth_service import SessionContext

router = APIRouter()


@router.get("/dashboard/summary", response_model=DashboardSummary, tags=["dashboard"])
def dashboard_summary(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return dashboard_service.dashboard_summary(db, ctx.user_id)


@router.get("/admin/metrics", response_model=AdminMetrics, tags=["admin"])
def admin_metrics(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(require_admin),
):
    return dashboard_service.admin_metrics(db)


@router.get("/public-config", response_model=PublicConfig, tags=["config"])
def public_config():
    """Browser-safe configuration (the map SDK's public token)."""
    return PublicConfig(mapbox_token=settings.mapbox_public_token)
