# File: landpro/api/v1/routes_project.py

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from landpro.api.deps import get_db, get_llm_client, get_session_context
from landpro.schemas.analysis import AnalysisRead, AnalysisRunRequest
from landpro.schemas.project import (
    BoundaryResult,
    BoundaryUpdate,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from landpro.services import analysis_service, project_service
from landpro.services.auth_service import SessionContext
from landpro.services.llm_client import ChatCompletionClient

router = APIRouter()


def _boundary_result(project, editor) -> BoundaryResult:
    return BoundaryResult(
        project=ProjectRead.model_validate(project),
        self_intersecting=editor.self_intersecting,
        analysis_invalidated=editor.analysis_invalidated,
    )


@router.get("/", response_model=list[ProjectRead], summary="List projects")
def list_projects(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return project_service.list_projects(db, ctx.user_id)


@router.post(
    "/",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return project_service.create_project(db, ctx.user_id, payload)


@router.get("/{project_id}", response_model=ProjectRead, summary="Get project")
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return project_service.get_project(db, ctx.user_id, project_id)


@router.patch("/{project_id}", response_model=ProjectRead, summary="Update project")
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return project_service.update_project(db, ctx.user_id, project_id, payload)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete project")
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    project_service.delete_project(db, ctx.user_id, project_id)


# ---------- BOUNDARY ----------

@router.put("/{project_id}/boundary", response_model=BoundaryResult, summary="Save land boundary")
def save_boundary(
    project_id: str,
    payload: BoundaryUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    """
    Save the drawn polygon (or clear it with ``null``). Acreage is
    recomputed here; any value the browser computed is ignored.
    """
    project, editor = project_service.set_boundary(
        db, ctx.user_id, project_id, payload.boundary, payload.version
    )
    return _boundary_result(project, editor)


@router.post(
    "/{project_id}/boundary/upload",
    response_model=BoundaryResult,
    summary="Upload land boundary GeoJSON",
)
async def upload_boundary(
    project_id: str,
    version: int = Form(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    polygon = project_service.read_boundary_file(file.filename, await file.read())
    project, editor = await run_in_threadpool(
        project_service.set_boundary, db, ctx.user_id, project_id, polygon, version
    )
    return _boundary_result(project, editor)


# ---------- ANALYSIS ----------

@router.get("/{project_id}/analysis", response_model=AnalysisRead, summary="Current land analysis")
def get_analysis(
    project_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return analysis_service.get_project_analysis(db, ctx.user_id, project_id)


@router.post("/{project_id}/analysis/run", response_model=AnalysisRead, summary="Run land analysis")
def run_analysis(
    project_id: str,
    payload: AnalysisRunRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
    llm: ChatCompletionClient = Depends(get_llm_client),
):
    return analysis_service.run_project_analysis(
        db, llm, ctx.user_id, project_id, payload.location, payload.intent
    )
