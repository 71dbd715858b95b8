# File: landpro/api/functions.py

"""
Stateless "edge functions" called directly by the browser.

Errors are rendered as ``{"error": ...}`` (request validation included, as
400) by the handlers in ``landpro.core.errors``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from landpro.api.deps import get_db, get_llm_client, get_session_context
from landpro.schemas.analysis import AnalyzeLandRequest, AnalyzeLandResponse
from landpro.schemas.invoice import PaymentLinkRequest, PaymentLinkResponse, WebhookAck
from landpro.schemas.parcel import PreprocessParcelRequest, PreprocessParcelResponse
from landpro.schemas.quote import GenerateQuoteRequest, QuoteEstimate
from landpro.services import analysis_service, parcel_service, payment_service, quote_service
from landpro.services.auth_service import SessionContext
from landpro.services.llm_client import ChatCompletionClient

router = APIRouter()


@router.post("/generate-quote", response_model=QuoteEstimate, response_model_exclude_none=True)
def generate_quote(
    payload: GenerateQuoteRequest,
    ctx: SessionContext = Depends(get_session_context),
    llm: ChatCompletionClient = Depends(get_llm_client),
):
    return quote_service.generate_quote(llm, payload)


@router.post("/analyze-land", response_model=AnalyzeLandResponse, response_model_exclude_none=True)
def analyze_land(
    payload: AnalyzeLandRequest,
    ctx: SessionContext = Depends(get_session_context),
    llm: ChatCompletionClient = Depends(get_llm_client),
):
    analysis = analysis_service.analyze_land(
        llm, payload.boundary, payload.acreage, payload.location, payload.intent
    )
    return AnalyzeLandResponse(analysis=analysis)


@router.post("/create-payment-link", response_model=PaymentLinkResponse)
def create_payment_link(
    payload: PaymentLinkRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    url = payment_service.create_payment_link(db, ctx.user_id, payload.invoiceId)
    return PaymentLinkResponse(success=True, paymentLink=url)


@router.post("/stripe-webhook", response_model=WebhookAck, response_model_exclude_none=True)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
):
    # Signature is computed over the exact bytes received
    payload = await request.body()
    return await run_in_threadpool(payment_service.process_webhook, db, payload, stripe_signature)


@router.post("/preprocess-parcel", response_model=PreprocessParcelResponse)
def preprocess_parcel(
    payload: PreprocessParcelRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    job = parcel_service.preprocess_parcel(
        db, ctx.user_id, payload.parcel_geometry, payload.property_goal, payload.ndvi
    )
    return PreprocessParcelResponse(
        job_id=job.id,
        property_type=job.payload["property_type"],
        acreage=job.payload["acreage"],
    )
