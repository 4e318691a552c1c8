"""User and session token models."""

import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Ordered by issue time; one row per live session
    tokens = relationship(
        "UserToken",
        back_populates="user",
        order_by="UserToken.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserToken(Base):
    """A live session token in a user's token list.

    Rows are appended on login and deleted on logout with single INSERT and
    DELETE statements, so concurrent sessions never overwrite each other.
    """

    __tablename__ = "user_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    access = Column(String(32), nullable=False)
    token = Column(String(512), nullable=False, index=True)

    user = relationship("User", back_populates="tokens")
