"""
SQLAlchemy ORM models for persistent storage.

Two tables mirror the two document collections: user profile documents
keyed by the opaque user key, and the friend ID reverse lookup.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserDocumentDB(Base):
    """
    A user's profile document.

    List fields are stored as JSON in their camelCase document shape so
    exported snapshots stay compatible with existing data.
    """

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    friend_id: Mapped[str | None] = mapped_column(String(8), unique=True, nullable=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)

    friends: Mapped[list[Any]] = mapped_column(JSON, default=list)
    pending_friend_requests: Mapped[list[Any]] = mapped_column(JSON, default=list)
    decks: Mapped[list[Any]] = mapped_column(JSON, default=list)
    games: Mapped[list[Any]] = mapped_column(JSON, default=list)
    pod_buddies: Mapped[list[Any]] = mapped_column(JSON, default=list)

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserDocumentDB(uid={self.uid}, friend_id={self.friend_id})>"


class FriendIdLookupDB(Base):
    """Reverse lookup from a friend ID to the owning user key."""

    __tablename__ = "friend_ids"

    friend_id: Mapped[str] = mapped_column(String(8), primary_key=True)
    uid: Mapped[str] = mapped_column(String(255), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<FriendIdLookupDB(friend_id={self.friend_id}, uid={self.uid})>"
