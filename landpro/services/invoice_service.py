# File: landpro/services/invoice_service.py

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from landpro.core.errors import BadRequestError, InvalidTransitionError, NotFoundError
from landpro.models.base import utcnow
from landpro.models.invoice import INVOICE_TRANSITIONS, Invoice
from landpro.schemas.invoice import InvoiceCreate
from landpro.services.client_service import get_client
from landpro.services.common import commit, ensure_version
from landpro.services.quote_service import get_quote

logger = logging.getLogger("landpro.invoices")

DEFAULT_PAYMENT_TERMS = timedelta(days=30)
INVOICEABLE_QUOTE_STATUSES = ("approved", "completed")


def next_invoice_number(db: Session, today: Optional[date] = None) -> str:
    """``INV-<year>-<5-digit sequence>``; the sequence restarts every year."""
    year = (today or date.today()).year
    prefix = f"INV-{year}-"
    last = db.scalar(
        select(Invoice.invoice_number)
        .where(Invoice.invoice_number.like(f"{prefix}%"))
        .order_by(Invoice.invoice_number.desc())
        .limit(1)
    )
    seq = int(last[len(prefix):]) + 1 if last else 1
    return f"{prefix}{seq:05d}"


def list_invoices(db: Session, user_id: str, status: Optional[str] = None) -> List[Invoice]:
    stmt = select(Invoice).where(Invoice.user_id == user_id)
    if status:
        stmt = stmt.where(Invoice.status == status)
    return list(db.scalars(stmt.order_by(Invoice.created_at.desc())))


def get_invoice(db: Session, user_id: str, invoice_id: str) -> Invoice:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None or invoice.user_id != user_id:
        raise NotFoundError("Invoice not found")
    return invoice


def create_invoice(db: Session, user_id: str, payload: InvoiceCreate) -> Invoice:
    client_id = payload.client_id
    amount: Optional[Decimal] = payload.amount

    if payload.quote_id:
        quote = get_quote(db, user_id, payload.quote_id)
        if quote.status not in INVOICEABLE_QUOTE_STATUSES:
            raise BadRequestError("Only approved or completed quotes can be invoiced")
        client_id = client_id or quote.client_id
        if amount is None:
            amount = quote.total_cost
    if not client_id:
        raise BadRequestError("The invoice needs a client")
    get_client(db, user_id, client_id)

    issue_date = date.today()
    invoice = Invoice(
        user_id=user_id,
        client_id=client_id,
        quote_id=payload.quote_id,
        invoice_number=next_invoice_number(db, issue_date),
        amount=amount,
        issue_date=issue_date,
        due_date=payload.due_date or issue_date + DEFAULT_PAYMENT_TERMS,
        status="draft",
    )
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    logger.info("Created invoice %s for %s", invoice.invoice_number, invoice.amount)
    return invoice


def transition_invoice(invoice: Invoice, new_status: str) -> None:
    if new_status not in INVOICE_TRANSITIONS.get(invoice.status, set()):
        raise InvalidTransitionError(f"Cannot move a {invoice.status} invoice to {new_status}")
    invoice.status = new_status
    if new_status == "paid":
        invoice.paid_at = utcnow()


def set_invoice_status(db: Session, user_id: str, invoice_id: str, new_status: str, version: int) -> Invoice:
    invoice = get_invoice(db, user_id, invoice_id)
    ensure_version(invoice, version)
    transition_invoice(invoice, new_status)
    commit(db)
    db.refresh(invoice)
    logger.info("Invoice %s is now %s", invoice.invoice_number, invoice.status)
    return invoice


def mark_paid(db: Session, user_id: str, invoice_id: str, version: int) -> Invoice:
    """Manual "mark as paid" (cash/check received outside the payment link)."""
    invoice = get_invoice(db, user_id, invoice_id)
    ensure_version(invoice, version)
    transition_invoice(invoice, "paid")
    commit(db)
    db.refresh(invoice)
    return invoice
