"""User and session API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from src.api.dependencies import get_current_session, get_current_user, get_session_service
from src.models.user import User
from src.schemas.auth import UserLogin, UserRegister, UserResponse
from src.services.auth import AuthSession, SessionService

router = APIRouter(prefix="/users", tags=["users"])

AUTH_HEADER = "x-auth"


@router.post("", response_model=UserResponse)
def signup(
    user_data: UserRegister,
    response: Response,
    sessions: Annotated[SessionService, Depends(get_session_service)],
):
    """Register a new user and return its first token in the x-auth header."""
    session = sessions.signup(user_data.email, user_data.password)
    response.headers[AUTH_HEADER] = session.token
    return UserResponse.model_validate(session.user)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@router.post("/login", response_model=UserResponse)
def login(
    credentials: UserLogin,
    response: Response,
    sessions: Annotated[SessionService, Depends(get_session_service)],
):
    """Login with email and password; the new token is in the x-auth header."""
    session = sessions.login(credentials.email, credentials.password)
    response.headers[AUTH_HEADER] = session.token
    return UserResponse.model_validate(session.user)


@router.delete("/me/token")
def logout(
    session: Annotated[AuthSession, Depends(get_current_session)],
    sessions: Annotated[SessionService, Depends(get_session_service)],
):
    """Revoke the token used for this request."""
    sessions.logout(session)
    return Response(status_code=200)
