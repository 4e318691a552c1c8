"""Todo service: CRUD scoped to the todo's creator."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.models.todo import Todo
from src.schemas.todo import TodoUpdate
from src.services.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)

TEXT_MAX_LENGTH = 2000


def parse_todo_id(value: str) -> uuid.UUID | None:
    """Parse a path id, returning None when it is not a well-formed UUID."""
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError, AttributeError):
        return None


def now_millis() -> int:
    """Current time as integer epoch milliseconds."""
    return int(datetime.now(UTC).timestamp() * 1000)


class TodoService:
    """Service for todo operations.

    Every method takes the caller's user id and only ever sees that user's
    todos. A todo owned by someone else is reported exactly like a missing
    one.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_owned(self, todo_id: str, creator_id: uuid.UUID) -> Todo:
        parsed_id = parse_todo_id(todo_id)
        if parsed_id is None:
            logger.debug(f"Invalid todo id {todo_id!r}")
            raise NotFound()

        todo = (
            self.db.query(Todo)
            .filter(Todo.id == parsed_id, Todo.creator_id == creator_id)
            .first()
        )
        if todo is None:
            raise NotFound()
        return todo

    def create_todo(self, creator_id: uuid.UUID, text: str) -> Todo:
        text = (text or "").strip()
        if not text:
            raise ValidationError("Todo text must not be empty")

        todo = Todo(text=text, completed=False, completed_at=None, creator_id=creator_id)
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def list_todos(self, creator_id: uuid.UUID) -> list[Todo]:
        return self.db.query(Todo).filter(Todo.creator_id == creator_id).all()

    def get_todo(self, creator_id: uuid.UUID, todo_id: str) -> Todo:
        return self._get_owned(todo_id, creator_id)

    def update_todo(self, creator_id: uuid.UUID, todo_id: str, changes: TodoUpdate) -> Todo:
        """Apply a partial update.

        ``completed=True`` stamps ``completed_at`` with the current time. Any
        other value, including omitting it, marks the todo incomplete and
        clears the timestamp.
        """
        todo = self._get_owned(todo_id, creator_id)

        if changes.text is not None:
            text = changes.text.strip() if isinstance(changes.text, str) else ""
            if not text or len(text) > TEXT_MAX_LENGTH:
                raise ValidationError("Todo text must be a non-empty string")
            todo.text = text

        if changes.completed is True:
            todo.completed = True
            todo.completed_at = now_millis()
        else:
            todo.completed = False
            todo.completed_at = None

        self.db.commit()
        self.db.refresh(todo)
        return todo

    def delete_todo(self, creator_id: uuid.UUID, todo_id: str) -> Todo:
        """Delete a todo and return its last state."""
        todo = self._get_owned(todo_id, creator_id)
        self.db.delete(todo)
        self.db.commit()
        logger.info(f"Deleted todo {todo.id} for user {creator_id}")
        return todo
