# File: landpro/api/v1/routes_client.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context
from landpro.schemas.client import ClientCreate, ClientRead, ClientUpdate, PortalAccessRequest
from landpro.services import client_service
from landpro.services.auth_service import SessionContext

router = APIRouter()


@router.get("/", response_model=list[ClientRead], summary="List clients")
def list_clients(
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return client_service.list_clients(db, ctx.user_id)


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED, summary="Add client")
def create_client(
    payload: ClientCreate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return client_service.create_client(db, ctx.user_id, payload)


@router.get("/{client_id}", response_model=ClientRead, summary="Get client")
def get_client(
    client_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return client_service.get_client(db, ctx.user_id, client_id)


@router.patch("/{client_id}", response_model=ClientRead, summary="Update client")
def update_client(
    client_id: str,
    payload: ClientUpdate,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return client_service.update_client(db, ctx.user_id, client_id, payload)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete client")
def delete_client(
    client_id: str,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    client_service.delete_client(db, ctx.user_id, client_id)


@router.post("/{client_id}/portal-access", response_model=ClientRead, summary="Grant portal access")
def grant_portal_access(
    client_id: str,
    payload: PortalAccessRequest,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    return client_service.grant_portal_access(db, ctx.user_id, client_id, payload.email)
