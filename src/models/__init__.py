"""SQLAlchemy models."""

from src.models.todo import Todo
from src.models.user import User, UserToken

__all__ = [
    "User",
    "UserToken",
    "Todo",
]
