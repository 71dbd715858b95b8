# File: landpro/api/v1/routes_invoice.py

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context
from landpro.schemas.common import VersionedRequest
from landpro.schemas.invoice import InvoiceCreate, InvoiceRead, InvoiceStatus, InvoiceStatusUpdate
from landpro.services import invoice_service
from landpro.services.auth_service import SessionContext

router = APIRouter()


@router.get("/", response_model=list[InvoiceRead], summary="List invoices")
def list_invoices(
    status: Optional[InvoiceStatus] = None,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return invoice_service.list_invoices(db, ctx.user_id, status=status)


@router.post("/", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED, summary="Create invoice")
def create_invoice(
    payload: InvoiceCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return invoice_service.create_invoice(db, ctx.user_id, payload)


@router.get("/{invoice_id}", response_model=InvoiceRead, summary="Get invoice")
def get_invoice(
    invoice_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return invoice_service.get_invoice(db, ctx.user_id, invoice_id)


@router.post("/{invoice_id}/status", response_model=InvoiceRead, summary="Change invoice status")
def set_invoice_status(
    invoice_id: str,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return invoice_service.set_invoice_status(
        db, ctx.user_id, invoice_id, payload.status, payload.version
    )


@router.post("/{invoice_id}/mark-paid", response_model=InvoiceRead, summary="Mark invoice paid")
def mark_paid(
    invoice_id: str,
    payload: VersionedRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return invoice_service.mark_paid(db, ctx.user_id, invoice_id, payload.version)
