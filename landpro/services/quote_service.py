# File: landpro/services/quote_service.py

"""
Quote generation and quote lifecycle.

``generate_quote`` asks the model for an itemized estimate and rounds every
figure to whole dollars/days; the total is the sum of the rounded parts, so
what the user sees always adds up.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from landpro.core.config import settings
from landpro.core.errors import InvalidTransitionError, NotFoundError, ResponseParseError
from landpro.gis.geometry import round_half_up
from landpro.models.quote import QUOTE_TRANSITIONS, Quote
from landpro.schemas.quote import (
    GenerateQuoteRequest,
    QuoteCreate,
    QuoteEstimate,
    QuoteEstimateDraft,
    QuoteFromEstimate,
    QuoteUpdate,
)
from landpro.services.client_service import get_client
from landpro.services.common import commit, ensure_version
from landpro.services.llm_client import ChatCompletionClient, message_json
from landpro.services.project_service import get_project
from landpro.services.prompts import (
    QUOTE_SYSTEM_PROMPT,
    QUOTE_TOOL,
    QUOTE_TOOL_NAME,
    build_quote_prompt,
)

logger = logging.getLogger("landpro.quotes")

Number = Union[int, float, Decimal]

_NULLABLE_QUOTE_FIELDS = {"client_id", "completion_time", "material_notes"}


# ============================================================
# DISPLAY HELPERS
# ============================================================

def format_currency(amount: Number) -> str:
    """Whole-dollar USD, e.g. ``1400 -> "$1,400"``."""
    return f"${int(round_half_up(float(amount))):,}"


def format_completion_time(days: Number) -> str:
    n = int(round_half_up(float(days)))
    return "1 day" if n == 1 else f"{n} days"


# ============================================================
# GENERATION
# ============================================================

def generate_quote(llm: ChatCompletionClient, req: GenerateQuoteRequest) -> QuoteEstimate:
    use_tools = settings.quote_use_tool_calling
    prompt = build_quote_prompt(
        client_name=req.client_name,
        job_description=req.job_description,
        property_size=req.property_size,
        property_unit=req.property_unit,
        material_notes=req.material_notes,
        json_reply=not use_tools,
    )

    logger.info(
        "Generating quote for %s (%s %s)", req.client_name, req.property_size, req.property_unit
    )
    message = llm.complete(
        model=settings.quote_model,
        messages=[
            {"role": "system", "content": QUOTE_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=0.7,
        max_tokens=500,
        tools=[QUOTE_TOOL] if use_tools else None,
        tool_choice={"type": "function", "function": {"name": QUOTE_TOOL_NAME}} if use_tools else None,
    )
    data = message_json(message, QUOTE_TOOL_NAME)

    try:
        draft = QuoteEstimateDraft.model_validate(data)
    except ValidationError as exc:
        logger.warning("Quote reply failed validation: %s", exc.errors()[:3])
        raise ResponseParseError("Failed to parse AI response as JSON")

    labor = int(round_half_up(draft.labor_cost))
    material = int(round_half_up(draft.material_cost))
    equipment = int(round_half_up(draft.equipment_cost)) if draft.equipment_cost is not None else None
    total = labor + material + (equipment or 0)

    return QuoteEstimate(
        job_title=draft.job_title,
        labor_cost=labor,
        material_cost=material,
        equipment_cost=equipment,
        total_estimate=total,
        completion_time=int(round_half_up(draft.completion_time)),
        notes=draft.notes or "",
        client_name=req.client_name,
        timestamp=datetime.now(timezone.utc),
    )


# ============================================================
# CRUD
# ============================================================

def list_quotes(
    db: Session,
    user_id: str,
    status: Optional[str] = None,
    client_id: Optional[str] = None,
) -> List[Quote]:
    stmt = select(Quote).where(Quote.user_id == user_id)
    if status:
        stmt = stmt.where(Quote.status == status)
    if client_id:
        stmt = stmt.where(Quote.client_id == client_id)
    return list(db.scalars(stmt.order_by(Quote.created_at.desc())))


def list_jobs(db: Session, user_id: str) -> dict:
    """Approved quotes are scheduled jobs; completed ones are history."""
    stmt = (
        select(Quote)
        .where(Quote.user_id == user_id, Quote.status.in_(("approved", "completed")))
        .order_by(Quote.updated_at.desc())
    )
    quotes = list(db.scalars(stmt))
    return {
        "scheduled": [q for q in quotes if q.status == "approved"],
        "completed": [q for q in quotes if q.status == "completed"],
    }


def get_quote(db: Session, user_id: str, quote_id: str) -> Quote:
    quote = db.get(Quote, quote_id)
    if quote is None or quote.user_id != user_id:
        raise NotFoundError("Quote not found")
    return quote


def _check_links(db: Session, user_id: str, client_id: Optional[str], project_id: Optional[str]) -> None:
    if client_id:
        get_client(db, user_id, client_id)
    if project_id:
        get_project(db, user_id, project_id)


def create_quote(db: Session, user_id: str, payload: QuoteCreate) -> Quote:
    _check_links(db, user_id, payload.client_id, payload.project_id)
    quote = Quote(user_id=user_id, **payload.model_dump())
    quote.recompute_total()
    db.add(quote)
    db.commit()
    db.refresh(quote)
    return quote


def create_quote_from_estimate(db: Session, user_id: str, payload: QuoteFromEstimate) -> Quote:
    _check_links(db, user_id, payload.client_id, payload.project_id)
    est = payload.estimate
    quote = Quote(
        user_id=user_id,
        client_id=payload.client_id,
        project_id=payload.project_id,
        client_name=est.client_name,
        job_description=payload.job_description,
        property_size=payload.property_size,
        property_unit=payload.property_unit,
        labor_cost=Decimal(est.labor_cost),
        material_cost=Decimal(est.material_cost),
        equipment_cost=Decimal(est.equipment_cost or 0),
        completion_time=format_completion_time(est.completion_time),
        material_notes=payload.material_notes,
    )
    quote.recompute_total()
    db.add(quote)
    db.commit()
    db.refresh(quote)
    return quote


def update_quote(db: Session, user_id: str, quote_id: str, payload: QuoteUpdate) -> Quote:
    quote = get_quote(db, user_id, quote_id)
    ensure_version(quote, payload.version)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True, exclude={"version"}).items()
        if value is not None or field in _NULLABLE_QUOTE_FIELDS
    }
    if changes.get("client_id"):
        get_client(db, user_id, changes["client_id"])
    for field, value in changes.items():
        setattr(quote, field, value)
    quote.recompute_total()
    commit(db)
    db.refresh(quote)
    return quote


def transition_quote(quote: Quote, new_status: str) -> None:
    if new_status not in QUOTE_TRANSITIONS.get(quote.status, set()):
        raise InvalidTransitionError(f"Cannot move a {quote.status} quote to {new_status}")
    quote.status = new_status


def set_quote_status(db: Session, user_id: str, quote_id: str, new_status: str, version: int) -> Quote:
    quote = get_quote(db, user_id, quote_id)
    ensure_version(quote, version)
    transition_quote(quote, new_status)
    commit(db)
    db.refresh(quote)
    logger.info("Quote %s is now %s", quote.id, quote.status)
    return quote


def delete_quote(db: Session, user_id: str, quote_id: str) -> None:
    quote = get_quote(db, user_id, quote_id)
    db.delete(quote)
    db.commit()
