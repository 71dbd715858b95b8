# File: landpro/api/v1/routes_portal.py

from typing import Literal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context
from landpro.schemas.common import VersionedRequest
from landpro.schemas.portal import PortalView
from landpro.schemas.quote import QuoteRead
from landpro.services import portal_service
from landpro.services.auth_service import SessionContext

router = APIRouter()


@router.get("/", response_model=PortalView, summary="Client portal overview")
def get_portal(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return portal_service.get_portal(db, ctx)


@router.post("/quotes/{quote_id}/{decision}", response_model=QuoteRead, summary="Approve or decline a quote")
def decide_quote(
    quote_id: str,
    decision: Literal["approve", "decline"],
    payload: VersionedRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return portal_service.decide_quote(db, ctx, quote_id, decision, payload.version)
