"""
Document store operations.

User profiles are read and written as camelCase documents. Writes merge
fields into the stored document; list fields can also be edited with
array_union/array_remove, where adding an existing element or removing
a missing one is a no-op.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.models.db import FriendIdLookupDB, UserDocumentDB
from podtracker.models.failure import NotFoundError

# Document field name -> ORM column attribute
USER_FIELDS: dict[str, str] = {
    "email": "email",
    "friendId": "friend_id",
    "username": "username",
    "friends": "friends",
    "pendingFriendRequests": "pending_friend_requests",
    "decks": "decks",
    "games": "games",
    "podBuddies": "pod_buddies",
}

LIST_FIELDS = frozenset({"friends", "pendingFriendRequests", "decks", "games", "podBuddies"})


def _column(field: str) -> str:
    try:
        return USER_FIELDS[field]
    except KeyError:
        msg = f"Unknown user document field: {field}"
        raise ValueError(msg) from None


def _new_user(uid: str) -> UserDocumentDB:
    return UserDocumentDB(
        uid=uid,
        friends=[],
        pending_friend_requests=[],
        decks=[],
        games=[],
        pod_buddies=[],
    )


# --- User Documents ---


async def get_user(session: AsyncSession, uid: str) -> UserDocumentDB | None:
    """Get a user's document row. Returns None if it does not exist."""
    return await session.get(UserDocumentDB, uid)


def user_to_document(user: UserDocumentDB) -> dict[str, Any]:
    """Convert a user row to its camelCase document form."""
    document: dict[str, Any] = {}
    for field, column in USER_FIELDS.items():
        value = getattr(user, column)
        if field in LIST_FIELDS:
            value = list(value or [])
        document[field] = value
    return document


async def get_user_document(session: AsyncSession, uid: str) -> dict[str, Any] | None:
    """
    Get a user's profile document.

    Returns None if no document exists for this user key.
    """
    user = await get_user(session, uid)
    if user is None:
        return None
    return user_to_document(user)


async def set_user_document(
    session: AsyncSession,
    uid: str,
    fields: dict[str, Any],
    merge: bool = True,
) -> UserDocumentDB:
    """
    Write fields into a user's document, creating it if needed.

    With merge=True only the given fields change. With merge=False the
    document is replaced: fields not given are reset to empty.
    """
    user = await get_user(session, uid)
    if user is None:
        user = _new_user(uid)
        session.add(user)
    elif not merge:
        for field, column in USER_FIELDS.items():
            setattr(user, column, [] if field in LIST_FIELDS else None)

    for field, value in fields.items():
        column = _column(field)
        setattr(user, column, list(value) if field in LIST_FIELDS else value)

    await session.flush()
    return user


async def _require_user(session: AsyncSession, uid: str) -> UserDocumentDB:
    user = await get_user(session, uid)
    if user is None:
        raise NotFoundError("User profile not found", detail=f"uid={uid}")
    return user


async def array_union(
    session: AsyncSession, uid: str, field: str, *values: Any
) -> UserDocumentDB:
    """
    Append values to a list field unless already present.

    Raises NotFoundError if the document does not exist.
    """
    if field not in LIST_FIELDS:
        msg = f"Field '{field}' is not a list field"
        raise ValueError(msg)

    user = await _require_user(session, uid)
    column = _column(field)
    current = list(getattr(user, column) or [])
    for value in values:
        if value not in current:
            current.append(value)

    # Reassign so the JSON column is marked dirty
    setattr(user, column, current)
    await session.flush()
    return user


async def array_remove(
    session: AsyncSession, uid: str, field: str, *values: Any
) -> UserDocumentDB:
    """
    Remove every element equal to one of values from a list field.

    Raises NotFoundError if the document does not exist.
    """
    if field not in LIST_FIELDS:
        msg = f"Field '{field}' is not a list field"
        raise ValueError(msg)

    user = await _require_user(session, uid)
    column = _column(field)
    current = [item for item in getattr(user, column) or [] if item not in values]
    setattr(user, column, current)
    await session.flush()
    return user


async def list_users(session: AsyncSession) -> list[UserDocumentDB]:
    """Get every user document, ordered by user key."""
    result = await session.execute(select(UserDocumentDB).order_by(UserDocumentDB.uid))
    return list(result.scalars().all())


# --- Friend ID Lookups ---


async def get_friend_lookup(session: AsyncSession, friend_id: str) -> str | None:
    """Resolve a friend ID to its user key. Returns None if unknown."""
    lookup = await session.get(FriendIdLookupDB, friend_id)
    return lookup.uid if lookup else None


async def friend_id_exists(session: AsyncSession, friend_id: str) -> bool:
    return await session.get(FriendIdLookupDB, friend_id) is not None


async def create_friend_lookup(session: AsyncSession, friend_id: str, uid: str) -> FriendIdLookupDB:
    """
    Claim a friend ID for a user.

    Raises IntegrityError on flush if the friend ID is already claimed.
    """
    lookup = FriendIdLookupDB(friend_id=friend_id, uid=uid)
    session.add(lookup)
    await session.flush()
    return lookup
