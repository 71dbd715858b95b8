# File: landpro/api/v1/routes_auth.py

"""
Auth API routes: signup, login and the explicit session re-check.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from landpro.api.deps import get_db, get_session_context
from landpro.schemas.user import LoginRequest, RegisterRequest, SessionRead, TokenResponse
from landpro.services import auth_service
from landpro.services.auth_service import SessionContext

router = APIRouter()


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and business profile",
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, payload)
    return auth_service.issue_token(user)


@router.post("/login", response_model=TokenResponse, summary="User login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return auth_service.login(db, payload.email, payload.password)


@router.get("/session", response_model=SessionRead, summary="Current session context")
def read_session(ctx: SessionContext = Depends(get_session_context)):
    """
    Re-validate the bearer token and return who the caller is, whether
    they are an admin and which client record they can see in the portal.
    """
    return SessionRead(
        user_id=ctx.user_id,
        email=ctx.email,
        is_admin=ctx.is_admin,
        client_id=ctx.client_id,
        profile=ctx.profile,
    )
