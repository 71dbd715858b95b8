# File: landpro/api/v1/routes_misc.py

"""
Public landing-page lead capture and the stateless measurement tool.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context
from landpro.gis.measure import measure
from landpro.schemas.lead import LeadCreate, LeadRead
from landpro.schemas.measure import MeasureRequest, MeasureResponse
from landpro.services import lead_service
from landpro.services.auth_service import SessionContext

router = APIRouter()


@router.post("/leads", response_model=LeadRead, status_code=status.HTTP_201_CREATED, tags=["leads"])
def create_lead(payload: LeadCreate, db: Session = Depends(get_db)):
    return lead_service.create_lead(db, payload)


@router.post("/measure", response_model=MeasureResponse, tags=["measure"])
def measure_points(
    payload: MeasureRequest,
    ctx: SessionContext = Depends(get_session_context),
):
    """
    Measure a click sequence: path length for ``distance`` (2+ points) or
    enclosed area for ``area`` (3+ points). Too few points gives no result.
    """
    result = measure(payload.mode, payload.points)
    if result is None:
        return MeasureResponse(mode=payload.mode)
    return MeasureResponse(mode=payload.mode, result=result.label, value=result.value, unit=result.unit)
