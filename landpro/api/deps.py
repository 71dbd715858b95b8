# File: landpro/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from landpro.core.config import settings
from landpro.core.errors import AuthenticationError, PermissionDeniedError
from landpro.core.security import decode_access_token
from landpro.db.session import SessionLocal
from landpro.services.auth_service import SessionContext, build_session_context
from landpro.services.llm_client import ChatCompletionClient

security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> SessionContext:
    """
    Resolve the bearer token into the caller's session context once per
    request. Routes receive identity from here and nowhere else.
    """
    if credentials is None:
        raise AuthenticationError()
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationError("Invalid token")
    return build_session_context(db, user_id)


def require_admin(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not ctx.is_admin:
        raise PermissionDeniedError("Admin role required")
    return ctx


def get_llm_client() -> ChatCompletionClient:
    return ChatCompletionClient(
        api_key=settings.llm_api_key,
        api_url=settings.llm_api_url,
        timeout=settings.llm_timeout_seconds,
    )
