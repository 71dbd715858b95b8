# File: landpro/services/parcel_service.py

"""
Parcel preprocessing: classify the property from its size and vegetation
index and queue an analysis job for it.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from landpro.gis.geometry import calculate_acreage, ring_centroid
from landpro.models.analysis import AnalysisJob

logger = logging.getLogger("landpro.parcels")

RESIDENTIAL_MAX_ACRES = 2
WOODED_MAX_ACRES = 15
PASTURE_MIN_ACRES = 15
DENSE_CANOPY_NDVI = 0.45
OPEN_FIELD_NDVI = 0.2


def classify_property(acreage: Optional[float], ndvi: Optional[float]) -> str:
    area = acreage or 0
    ndvi = ndvi or 0
    if area < RESIDENTIAL_MAX_ACRES:
        return "residential"
    if area < WOODED_MAX_ACRES and ndvi > DENSE_CANOPY_NDVI:
        return "wooded"
    if area > PASTURE_MIN_ACRES and ndvi < OPEN_FIELD_NDVI:
        return "pasture"
    return "mixed"


def preprocess_parcel(
    db: Session,
    user_id: str,
    parcel_geometry: dict,
    property_goal: Optional[str] = None,
    ndvi: Optional[float] = None,
) -> AnalysisJob:
    acreage = calculate_acreage(parcel_geometry)
    lon, lat = ring_centroid(parcel_geometry)
    property_type = classify_property(acreage, ndvi)

    job = AnalysisJob(
        user_id=user_id,
        payload={
            "parcel_geometry": parcel_geometry,
            "lat": lat,
            "lng": lon,
            "acreage": acreage,
            "ndvi": ndvi,
            "property_goal": property_goal,
            "property_type": property_type,
        },
        status="pending",
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Created analysis job %s (%s, %s acres)", job.id, property_type, acreage)
    return job
