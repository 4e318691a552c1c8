"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.models.user import User
from src.services.auth import Authenticator, AuthSession, SessionService, TokenCodec
from src.services.todo_service import TodoService


def get_token_codec(settings: Annotated[Settings, Depends(get_settings)]) -> TokenCodec:
    """Get a token codec bound to the configured secret."""
    return TokenCodec.from_settings(settings)


def get_session_service(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> SessionService:
    """Get session lifecycle service with dependencies."""
    return SessionService(db, codec)


def get_current_session(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    x_auth: Annotated[str | None, Header()] = None,
) -> AuthSession:
    """Resolve the ``x-auth`` header to a live session."""
    return Authenticator(db, codec).authenticate(x_auth)


def get_current_user(
    session: Annotated[AuthSession, Depends(get_current_session)],
) -> User:
    """Get the current authenticated user."""
    return session.user


def get_todo_service(
    db: Annotated[Session, Depends(get_db)],
) -> TodoService:
    """Get todo service with dependencies."""
    return TodoService(db)
