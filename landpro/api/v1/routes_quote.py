# File: landpro/api/v1/routes_quote.py

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context
from landpro.schemas.quote import (
    JobList,
    QuoteCreate,
    QuoteFromEstimate,
    QuoteRead,
    QuoteStatus,
    QuoteStatusUpdate,
    QuoteUpdate,
)
from landpro.services import quote_service
from landpro.services.auth_service import SessionContext

router = APIRouter()
jobs_router = APIRouter()


@router.get("/", response_model=list[QuoteRead], summary="List quotes")
def list_quotes(
    status: Optional[QuoteStatus] = None,
    client_id: Optional[str] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.list_quotes(db, ctx.user_id, status=status, client_id=client_id)


@router.post("/", response_model=QuoteRead, status_code=status.HTTP_201_CREATED, summary="Create quote")
def create_quote(
    payload: QuoteCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.create_quote(db, ctx.user_id, payload)


@router.post(
    "/from-estimate",
    response_model=QuoteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Save a generated estimate as a quote",
)
def create_quote_from_estimate(
    payload: QuoteFromEstimate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.create_quote_from_estimate(db, ctx.user_id, payload)


@router.get("/{quote_id}", response_model=QuoteRead, summary="Get quote")
def get_quote(
    quote_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.get_quote(db, ctx.user_id, quote_id)


@router.patch("/{quote_id}", response_model=QuoteRead, summary="Update quote")
def update_quote(
    quote_id: str,
    payload: QuoteUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.update_quote(db, ctx.user_id, quote_id, payload)


@router.post("/{quote_id}/status", response_model=QuoteRead, summary="Change quote status")
def set_quote_status(
    quote_id: str,
    payload: QuoteStatusUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.set_quote_status(db, ctx.user_id, quote_id, payload.status, payload.version)


@router.delete("/{quote_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete quote")
def delete_quote(
    quote_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    quote_service.delete_quote(db, ctx.user_id, quote_id)


@jobs_router.get("/", response_model=JobList, summary="Scheduled and completed jobs")
def list_jobs(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return quote_service.list_jobs(db, ctx.user_id)
