# File: landpro/services/lead_service.py

import logging

from sqlalchemy.orm import Session

from landpro.models.lead import Lead
from landpro.schemas.lead import LeadCreate

logger = logging.getLogger("landpro.leads")


def create_lead(db: Session, payload: LeadCreate) -> Lead:
    lead = Lead(**payload.model_dump())
    db.add(lead)
    db.commit()
    db.refresh(lead)
    logger.info("New waitlist lead %s", lead.id)
    return lead
