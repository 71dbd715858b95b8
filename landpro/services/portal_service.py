# File: landpro/services/portal_service.py

"""
Client portal: a client's read-only view of the quotes and invoices their
landscaper issued to them, plus approve/decline on open quotes.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from landpro.core.errors import NotFoundError, PermissionDeniedError
from landpro.models.client import Client
from landpro.models.invoice import Invoice
from landpro.models.quote import Quote
from landpro.models.user import Profile
from landpro.services.auth_service import SessionContext
from landpro.services.common import commit, ensure_version
from landpro.services.quote_service import transition_quote

logger = logging.getLogger("landpro.portal")

PORTAL_DECISIONS = {"approve": "approved", "decline": "declined"}


def _portal_client(db: Session, ctx: SessionContext) -> Client:
    if ctx.client_id is None:
        raise PermissionDeniedError("This account has no client portal access")
    client = db.get(Client, ctx.client_id)
    if client is None:
        raise PermissionDeniedError("This account has no client portal access")
    return client


def get_portal(db: Session, ctx: SessionContext) -> dict:
    client = _portal_client(db, ctx)
    landscaper = db.get(Profile, client.landscaper_id)
    quotes = db.scalars(
        select(Quote).where(Quote.client_id == client.id).order_by(Quote.created_at.desc())
    )
    invoices = db.scalars(
        select(Invoice).where(Invoice.client_id == client.id).order_by(Invoice.created_at.desc())
    )
    return {
        "client": client,
        "landscaper_name": (landscaper.business_name or landscaper.full_name) if landscaper else None,
        "quotes": list(quotes),
        "invoices": list(invoices),
    }


def decide_quote(
    db: Session, ctx: SessionContext, quote_id: str, decision: str, version: int
) -> Quote:
    client = _portal_client(db, ctx)
    quote = db.get(Quote, quote_id)
    if quote is None or quote.client_id != client.id:
        raise NotFoundError("Quote not found")

    ensure_version(quote, version)
    transition_quote(quote, PORTAL_DECISIONS[decision])
    commit(db)
    db.refresh(quote)
    logger.info("Client %s %s quote %s", client.id, quote.status, quote.id)
    return quote
