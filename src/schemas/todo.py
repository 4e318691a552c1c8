"""Todo schemas."""

import uuid
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

TodoText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]


class TodoCreate(BaseModel):
    """Create a new todo."""

    text: TodoText


class TodoUpdate(BaseModel):
    """Partial todo update.

    Only ``text`` and ``completed`` are accepted; any other submitted field is
    dropped. ``completed_at`` is always derived from ``completed``. Values are
    left untyped so the todo id is checked before the body; ``TodoService``
    validates ``text`` and treats anything but a literal ``true`` as incomplete.
    """

    model_config = ConfigDict(extra="ignore")

    text: Any = None
    completed: Any = None


class TodoResponse(BaseModel):
    """Todo response."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    text: str
    completed: bool
    completed_at: int | None = Field(alias="completedAt")
    creator_id: uuid.UUID = Field(alias="creator")


class TodoEnvelope(BaseModel):
    """Single todo wrapped under a ``todo`` key."""

    todo: TodoResponse


class TodoListResponse(BaseModel):
    """All of the caller's todos."""

    todos: list[TodoResponse]
