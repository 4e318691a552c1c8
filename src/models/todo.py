"""Todo model."""

import uuid

from sqlalchemy import BigInteger, Boolean, Column, ForeignKey, String, Uuid

from src.database import Base
from src.models.mixins import TimestampMixin


class Todo(Base, TimestampMixin):
    """Todo item owned by exactly one user."""

    __tablename__ = "todos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    text = Column(String(2000), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(BigInteger, nullable=True)  # epoch millis, set iff completed
    # Set once at creation, never reassigned
    creator_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
