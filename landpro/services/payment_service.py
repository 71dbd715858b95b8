# File: landpro/services/payment_service.py

"""
Stripe payment links and webhook handling.

Webhook deliveries are at-least-once. Each verified event id is recorded in
``webhook_events`` in the same transaction as the invoice change it causes,
so a redelivered event is acknowledged without being applied twice.
"""

import json
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Optional

import stripe
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from landpro.core.config import settings
from landpro.core.errors import (
    BadRequestError,
    ConfigurationError,
    ConflictError,
    InvalidTransitionError,
    SignatureVerificationError,
    UpstreamError,
)
from landpro.models.invoice import Invoice
from landpro.models.webhook_event import WebhookEvent
from landpro.services.common import commit
from landpro.services.invoice_service import get_invoice, transition_invoice

logger = logging.getLogger("landpro.payments")

CONFIRMATION_MESSAGE = "Thank you for your payment! Your invoice has been marked as paid."


def get_stripe_client():
    """Configure the stripe module with the secret key."""
    if not settings.stripe_secret_key:
        raise ConfigurationError("Payment provider not configured")
    stripe.api_key = settings.stripe_secret_key
    return stripe


def to_minor_units(amount: Decimal) -> int:
    """Dollars to cents, halves rounded up."""
    return int((Decimal(amount) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


# ============================================================
# PAYMENT LINK
# ============================================================

def create_payment_link(db: Session, user_id: str, invoice_id: str) -> str:
    client = get_stripe_client()
    invoice = get_invoice(db, user_id, invoice_id)
    if invoice.status == "paid":
        raise InvalidTransitionError("Invoice is already paid")

    logger.info("Creating payment link for invoice %s", invoice.invoice_number)
    try:
        link = client.PaymentLink.create(
            line_items=[
                {
                    "price_data": {
                        "currency": settings.payment_currency,
                        "product_data": {
                            "name": f"Invoice {invoice.invoice_number}",
                            "description": "Payment for LandPro AI services",
                        },
                        "unit_amount": to_minor_units(invoice.amount),
                    },
                    "quantity": 1,
                }
            ],
            metadata={
                "invoice_id": invoice.id,
                "invoice_number": invoice.invoice_number,
            },
            after_completion={
                "type": "hosted_confirmation",
                "hosted_confirmation": {"custom_message": CONFIRMATION_MESSAGE},
            },
        )
    except stripe.StripeError as exc:
        logger.error(
            "Stripe rejected payment link for %s: %s",
            invoice.invoice_number,
            exc,
            extra={
                "upstream": "stripe",
                "upstream_status": getattr(exc, "http_status", None),
                "invoice_number": invoice.invoice_number,
            },
        )
        raise UpstreamError("Failed to create payment link")

    invoice.stripe_payment_link = link.url
    if invoice.status == "draft":
        transition_invoice(invoice, "sent")
    commit(db)
    logger.info("Invoice %s sent with payment link", invoice.invoice_number)
    return link.url


# ============================================================
# WEBHOOK
# ============================================================

def verify_event(payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
    """Check the ``Stripe-Signature`` header and decode the event."""
    if not signature:
        raise SignatureVerificationError("No stripe signature found")
    secret = settings.stripe_webhook_secret
    if not secret:
        raise ConfigurationError("Webhook secret not configured")

    try:
        text = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            text, signature, secret, settings.stripe_webhook_tolerance
        )
    except (UnicodeDecodeError, stripe.SignatureVerificationError) as exc:
        logger.warning("Webhook signature verification failed: %s", exc)
        raise SignatureVerificationError()

    try:
        event = json.loads(text)
    except json.JSONDecodeError:
        raise BadRequestError("Invalid webhook payload")
    if not isinstance(event, dict) or not event.get("id") or not event.get("type"):
        raise BadRequestError("Invalid webhook payload")
    return event


def handle_checkout_completed(db: Session, data: Dict[str, Any]) -> None:
    session = data.get("object") or {}
    invoice_id = (session.get("metadata") or {}).get("invoice_id")
    if not invoice_id:
        return

    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        logger.warning("Checkout completed for unknown invoice %s", invoice_id)
        return
    if invoice.status == "paid":
        logger.info("Invoice %s already paid", invoice.invoice_number)
        return

    transition_invoice(invoice, "paid")
    invoice.stripe_payment_intent_id = session.get("payment_intent")
    logger.info("Marking invoice %s as paid", invoice.invoice_number)


WEBHOOK_HANDLERS: Dict[str, Callable[[Session, Dict[str, Any]], None]] = {
    "checkout.session.completed": handle_checkout_completed,
}


def process_webhook(db: Session, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
    event = verify_event(payload, signature)
    event_id, event_type = event["id"], event["type"]

    db.add(WebhookEvent(id=event_id, type=event_type))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.info("Duplicate webhook event %s ignored", event_id, extra={"event_id": event_id})
        return {"received": True, "duplicate": True}

    handler = WEBHOOK_HANDLERS.get(event_type)
    if handler:
        logger.info("Processing webhook event %s (%s)", event_id, event_type, extra={"event_id": event_id})
        handler(db, event.get("data") or {})
    else:
        logger.debug("No handler for webhook event: %s", event_type)

    try:
        db.commit()
    except IntegrityError:
        # Same event committed by a concurrent delivery
        db.rollback()
        return {"received": True, "duplicate": True}
    except StaleDataError:
        db.rollback()
        raise ConflictError()
    return {"received": True}
