"""Todo API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_todo_service
from src.models.user import User
from src.schemas.todo import TodoCreate, TodoEnvelope, TodoListResponse, TodoResponse, TodoUpdate
from src.services.todo_service import TodoService

router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=TodoEnvelope)
def create_todo(
    todo_data: TodoCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    todos: Annotated[TodoService, Depends(get_todo_service)],
):
    """Create a todo owned by the current user."""
    todo = todos.create_todo(current_user.id, todo_data.text)
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))


@router.get("", response_model=TodoListResponse)
def get_todos(
    current_user: Annotated[User, Depends(get_current_user)],
    todos: Annotated[TodoService, Depends(get_todo_service)],
):
    """Get all todos of the current user."""
    return TodoListResponse(
        todos=[TodoResponse.model_validate(todo) for todo in todos.list_todos(current_user.id)]
    )


@router.get("/{todo_id}", response_model=TodoEnvelope)
def get_todo(
    todo_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    todos: Annotated[TodoService, Depends(get_todo_service)],
):
    """Get a single todo."""
    todo = todos.get_todo(current_user.id, todo_id)
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))


@router.patch("/{todo_id}", response_model=TodoEnvelope)
def update_todo(
    todo_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    todos: Annotated[TodoService, Depends(get_todo_service)],
    todo_data: TodoUpdate | None = None,
):
    """Update text and/or completion of a todo."""
    todo = todos.update_todo(current_user.id, todo_id, todo_data or TodoUpdate())
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))


@router.delete("/{todo_id}", response_model=TodoEnvelope)
def delete_todo(
    todo_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    todos: Annotated[TodoService, Depends(get_todo_service)],
):
    """Delete a todo, returning it."""
    todo = todos.delete_todo(current_user.id, todo_id)
    return TodoEnvelope(todo=TodoResponse.model_validate(todo))
