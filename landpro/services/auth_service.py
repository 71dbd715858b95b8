# File: landpro/services/auth_service.py

"""
Authentication service.

  - Registration (user + profile in one transaction)
  - User lookup and password verification
  - Token generation
  - Session context: who is calling, are they an admin, which client record
    (if any) they can see through the portal
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from landpro.core.errors import AuthenticationError, ConflictError
from landpro.core.security import create_access_token, hash_password, verify_password
from landpro.models.client import Client
from landpro.models.user import Profile, User
from landpro.schemas.user import RegisterRequest

logger = logging.getLogger("landpro.auth")


@dataclass
class SessionContext:
    user_id: str
    email: str
    profile: Optional[Profile] = None
    client_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.is_admin


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalar(select(User).where(User.email == email.strip().lower()))


def register_user(db: Session, payload: RegisterRequest) -> User:
    if get_user_by_email(db, payload.email) is not None:
        raise ConflictError("An account with this email already exists")

    user = User(email=payload.email, hashed_password=hash_password(payload.password))
    user.profile = Profile(
        email=payload.email,
        full_name=payload.full_name,
        business_name=payload.business_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def issue_token(user: User) -> dict:
    return {
        "access_token": create_access_token({"sub": user.id}),
        "token_type": "bearer",
        "user_id": user.id,
        "email": user.email,
    }


def login(db: Session, email: str, password: str) -> dict:
    user = authenticate_user(db, email=email, password=password)
    if user is None:
        raise AuthenticationError("Invalid email or password")
    return issue_token(user)


def build_session_context(db: Session, user_id: str) -> SessionContext:
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    client_id = db.scalar(select(Client.id).where(Client.client_user_id == user.id).limit(1))
    return SessionContext(
        user_id=user.id,
        email=user.email,
        profile=user.profile,
        client_id=client_id,
    )
