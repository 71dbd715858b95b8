# File: landpro/services/analysis_service.py

"""
AI land analysis.

Builds the prompt from the polygon (rough centroid, vertex count, area),
sends a single completion request and validates the reply into a versioned
``AnalysisResult``. Nothing is cached: every call hits the model.
"""

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from landpro.core.config import settings
from landpro.core.errors import BadRequestError, NotFoundError, ResponseParseError
from landpro.gis.geometry import ring_centroid
from landpro.models.analysis import Analysis
from landpro.models.base import utcnow
from landpro.schemas.analysis import AnalysisResult
from landpro.services.llm_client import ChatCompletionClient, message_json
from landpro.services.project_service import get_project, latest_analysis
from landpro.services.prompts import ANALYSIS_SYSTEM_PROMPT, build_analysis_prompt

logger = logging.getLogger("landpro.analysis")


def analyze_land(
    llm: ChatCompletionClient,
    boundary: dict,
    acreage: float,
    location: Optional[str] = None,
    intent: Optional[str] = None,
) -> AnalysisResult:
    ring = boundary["coordinates"][0]
    prompt = build_analysis_prompt(
        acreage=acreage,
        centroid=ring_centroid(boundary),
        vertex_count=len(ring) - 1,
        location=location,
        intent=intent,
    )

    logger.info("Requesting land analysis: %s acres, intent=%s", acreage, intent or "general")
    message = llm.complete(
        model=settings.analysis_model,
        messages=[
            {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
    )
    data = message_json(message)

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as exc:
        logger.warning("Analysis reply failed validation: %s", exc.errors()[:3])
        raise ResponseParseError("Failed to parse analysis results")

    logger.info("Land analysis completed")
    return result


def run_project_analysis(
    db: Session,
    llm: ChatCompletionClient,
    user_id: str,
    project_id: str,
    location: Optional[str] = None,
    intent: Optional[str] = None,
) -> Analysis:
    """Analyze the project's saved boundary and save-or-update its current analysis."""
    project = get_project(db, user_id, project_id)
    if not project.boundary or not project.acreage:
        raise BadRequestError("Please define property boundaries first")

    result = analyze_land(llm, project.boundary, project.acreage, location, intent)
    payload = result.model_dump()

    analysis = latest_analysis(db, project.id)
    if analysis is None:
        analysis = Analysis(project_id=project.id)
        db.add(analysis)
    analysis.land_classification = payload
    analysis.hazards = payload["hazards"]
    analysis.intent = intent
    analysis.stale = False
    analysis.created_at = utcnow()

    db.commit()
    db.refresh(analysis)
    return analysis


def get_project_analysis(db: Session, user_id: str, project_id: str) -> Analysis:
    project = get_project(db, user_id, project_id)
    analysis = latest_analysis(db, project.id)
    if analysis is None:
        raise NotFoundError("No analysis for this project yet")
    return analysis
