# File: landpro/services/client_service.py

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from landpro.core.errors import BadRequestError, ConflictError, NotFoundError
from landpro.models.client import Client
from landpro.models.invoice import Invoice
from landpro.models.quote import Quote
from landpro.models.user import User
from landpro.schemas.client import ClientCreate, ClientUpdate


def list_clients(db: Session, user_id: str) -> List[Client]:
    stmt = (
        select(Client)
        .where(Client.landscaper_id == user_id)
        .order_by(Client.created_at.desc())
    )
    return list(db.scalars(stmt))


def get_client(db: Session, user_id: str, client_id: str) -> Client:
    client = db.get(Client, client_id)
    if client is None or client.landscaper_id != user_id:
        raise NotFoundError("Client not found")
    return client


def create_client(db: Session, user_id: str, payload: ClientCreate) -> Client:
    client = Client(landscaper_id=user_id, **payload.model_dump())
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


def update_client(db: Session, user_id: str, client_id: str, payload: ClientUpdate) -> Client:
    client = get_client(db, user_id, client_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(client, field, value)
    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, user_id: str, client_id: str) -> None:
    client = get_client(db, user_id, client_id)
    if db.scalar(select(Invoice.id).where(Invoice.client_id == client.id).limit(1)):
        raise ConflictError("Client has invoices and cannot be deleted")
    db.execute(update(Quote).where(Quote.client_id == client.id).values(client_id=None))
    db.delete(client)
    db.commit()


def grant_portal_access(db: Session, user_id: str, client_id: str, email: str) -> Client:
    """Link an existing account to the client record so it can use the portal."""
    client = get_client(db, user_id, client_id)
    account = db.scalar(select(User).where(User.email == email.strip().lower()))
    if account is None:
        raise BadRequestError("No account is registered with that email")
    if account.id == user_id:
        raise BadRequestError("You cannot link your own account as a client")

    linked: Optional[Client] = db.scalar(
        select(Client).where(Client.client_user_id == account.id, Client.id != client.id)
    )
    if linked is not None:
        raise ConflictError("That account already has portal access to another client")

    client.client_user_id = account.id
    db.commit()
    db.refresh(client)
    return client
