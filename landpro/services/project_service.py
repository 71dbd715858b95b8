# File: landpro/services/project_service.py

"""
Projects and their land boundaries.

Acreage is never taken from the caller: every boundary write goes through
``BoundaryEditor``, which recomputes it from the polygon and reports whether
an existing analysis was invalidated by the new shape.
"""

import json
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from landpro.core.errors import BadRequestError, NotFoundError
from landpro.gis.boundary import BoundaryEditor
from landpro.gis.geometry import parse_polygon
from landpro.models.analysis import Analysis
from landpro.models.project import Project
from landpro.models.quote import Quote
from landpro.schemas.project import ProjectCreate, ProjectUpdate
from landpro.services.common import commit, ensure_version

logger = logging.getLogger("landpro.projects")

GEOJSON_EXTENSIONS = (".geojson", ".json")


def list_projects(db: Session, user_id: str) -> List[Project]:
    stmt = (
        select(Project)
        .where(Project.user_id == user_id)
        .order_by(Project.updated_at.desc())
    )
    return list(db.scalars(stmt))


def get_project(db: Session, user_id: str, project_id: str) -> Project:
    project = db.get(Project, project_id)
    if project is None or project.user_id != user_id:
        raise NotFoundError("Project not found")
    return project


def create_project(db: Session, user_id: str, payload: ProjectCreate) -> Project:
    project = Project(user_id=user_id, **payload.model_dump())
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def update_project(db: Session, user_id: str, project_id: str, payload: ProjectUpdate) -> Project:
    project = get_project(db, user_id, project_id)
    ensure_version(project, payload.version)
    for field, value in payload.model_dump(exclude_unset=True, exclude={"version"}).items():
        setattr(project, field, value)
    commit(db)
    db.refresh(project)
    return project


def delete_project(db: Session, user_id: str, project_id: str) -> None:
    project = get_project(db, user_id, project_id)
    db.execute(update(Quote).where(Quote.project_id == project.id).values(project_id=None))
    for analysis in db.scalars(select(Analysis).where(Analysis.project_id == project.id)):
        db.delete(analysis)
    db.delete(project)
    db.commit()


# ---------- analyses ----------

def latest_analysis(db: Session, project_id: str) -> Optional[Analysis]:
    stmt = (
        select(Analysis)
        .where(Analysis.project_id == project_id)
        .order_by(Analysis.created_at.desc())
        .limit(1)
    )
    return db.scalar(stmt)


def _mark_analyses_stale(db: Session, project_id: str) -> None:
    db.execute(
        update(Analysis)
        .where(Analysis.project_id == project_id, Analysis.stale.is_(False))
        .values(stale=True)
    )


# ---------- boundary ----------

def set_boundary(
    db: Session,
    user_id: str,
    project_id: str,
    boundary: Optional[dict],
    version: int,
) -> Tuple[Project, BoundaryEditor]:
    """
    Save (or clear, when ``boundary`` is None) the project's boundary.

    Returns the project and the editor state, whose ``self_intersecting`` and
    ``analysis_invalidated`` flags are surfaced to the caller.
    """
    project = get_project(db, user_id, project_id)
    ensure_version(project, version)

    current = latest_analysis(db, project.id)
    editor = BoundaryEditor(
        polygon=project.boundary,
        acreage=project.acreage,
        analysis=current.land_classification if current is not None and not current.stale else None,
    )
    if boundary is None:
        editor.delete()
    else:
        editor.update(boundary)

    project.boundary = editor.polygon
    project.acreage = editor.acreage
    if editor.polygon is not None and project.status == "draft":
        project.status = "active"
    if editor.analysis_invalidated:
        _mark_analyses_stale(db, project.id)

    commit(db)
    db.refresh(project)
    logger.info(
        "Boundary saved for project %s: %s acres%s",
        project.id,
        project.acreage,
        " (self-intersecting)" if editor.self_intersecting else "",
    )
    return project, editor


def read_boundary_file(filename: Optional[str], data: bytes) -> dict:
    """Decode an uploaded GeoJSON file into its first polygon."""
    if not filename or not filename.lower().endswith(GEOJSON_EXTENSIONS):
        raise BadRequestError("Please upload a GeoJSON (.geojson/.json) file.")
    try:
        geojson = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise BadRequestError("Invalid GeoJSON file.")
    try:
        return parse_polygon(geojson)
    except ValueError as exc:
        raise BadRequestError(str(exc))
