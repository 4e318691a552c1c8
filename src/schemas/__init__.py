"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import UserLogin, UserRegister, UserResponse
from src.schemas.todo import TodoCreate, TodoEnvelope, TodoListResponse, TodoResponse, TodoUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
    "TodoEnvelope",
    "TodoListResponse",
]
