"""
Friend profiles and friend requests.

Each user has a short friend ID (8 characters, no ambiguous glyphs) and a
display name. Friendship is built from asymmetric steps:

    A sends a request    -> request stored in B's pending list only
    B accepts            -> each ID added to the other's friends list
    B declines           -> request removed from B's pending list
    either side removes  -> ID removed from the remover's list only

Every function takes the request's AsyncSession, so the writes one call
makes commit or roll back together.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.config import settings
from podtracker.db.operations import (
    array_remove,
    array_union,
    create_friend_lookup,
    friend_id_exists,
    get_friend_lookup,
    get_user,
    get_user_document,
    list_users,
    set_user_document,
)
from podtracker.models.failure import FriendIdExhaustedError, NotFoundError, ValidationError
from podtracker.models.profile import (
    FRIEND_ID_CHARS,
    FRIEND_ID_LENGTH,
    Friend,
    FriendPublicData,
    FriendRequest,
    ProfileData,
    UserProfile,
)
from podtracker.models.records import load_decks, load_games

logger = logging.getLogger(__name__)

UNKNOWN_USERNAME = "Unknown"

_system_random = random.SystemRandom()


def generate_friend_id(rng: random.Random | None = None) -> str:
    """Generate a random friend ID from the unambiguous alphabet."""
    rng = rng or _system_random
    return "".join(rng.choice(FRIEND_ID_CHARS) for _ in range(FRIEND_ID_LENGTH))


def normalize_friend_id(friend_id: str) -> str:
    return friend_id.strip().upper()


def default_username(email: str) -> str:
    """The local part of an email address, "Unknown" when there is none."""
    return email.split("@")[0].strip() or UNKNOWN_USERNAME


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


# --- Profile ---


async def ensure_user_profile(
    session: AsyncSession,
    uid: str,
    email: str,
    rng: random.Random | None = None,
) -> ProfileData:
    """
    Ensure the user has a profile with a friend ID.

    Returns the existing profile unchanged if it already has a friend ID.
    Otherwise generates an unused ID, claims it in the reverse lookup and
    then merges it into the profile document.

    Raises:
        FriendIdExhaustedError: If every generated ID was already taken
    """
    data = await get_user_document(session, uid) or {}

    if data.get("friendId"):
        return ProfileData(
            friend_id=data["friendId"],
            username=data.get("username") or default_username(email),
        )

    max_attempts = settings.friend_id_max_attempts
    friend_id: str | None = None
    for _ in range(max_attempts):
        candidate = generate_friend_id(rng)
        if not await friend_id_exists(session, candidate):
            friend_id = candidate
            break
        logger.debug("Friend ID collision on %s", candidate)

    if friend_id is None:
        logger.error("Could not generate a unique friend ID for %s", uid)
        raise FriendIdExhaustedError(max_attempts)

    username = data.get("username") or default_username(email)

    # Lookup first, so the profile never points at an unmapped ID
    await create_friend_lookup(session, friend_id, uid)
    await set_user_document(
        session,
        uid,
        {
            "friendId": friend_id,
            "username": username,
            "email": email,
            "friends": data.get("friends") or [],
        },
        merge=True,
    )

    logger.info("Created profile for %s with friend ID %s", uid, friend_id)
    return ProfileData(friend_id=friend_id, username=username)


async def update_username(session: AsyncSession, uid: str, username: str) -> str:
    """
    Set the user's display name.

    Returns the trimmed name. Raises ValidationError if it is blank.
    """
    trimmed = username.strip()
    if not trimmed:
        raise ValidationError("Username cannot be empty")

    await set_user_document(session, uid, {"username": trimmed}, merge=True)
    return trimmed


# --- Friend Requests ---


def _find_request(pending: list[dict[str, str]], from_friend_id: str) -> dict[str, str] | None:
    for request in pending:
        if request.get("fromFriendId") == from_friend_id:
            return request
    return None


async def send_friend_request(
    session: AsyncSession,
    uid: str,
    my_friend_id: str,
    my_username: str,
    target_friend_id: str,
) -> FriendRequest:
    """
    Send a friend request to the owner of target_friend_id.

    Checks run in order and each fails with its own message before any write:
    wrong length, self-add, already friends, unknown ID, request already sent.

    Raises:
        ValidationError: For malformed, self, duplicate-friend or duplicate-request cases
        NotFoundError: If no user owns target_friend_id
    """
    normalized = normalize_friend_id(target_friend_id)
    if len(normalized) != FRIEND_ID_LENGTH:
        raise ValidationError(f"Friend ID must be {FRIEND_ID_LENGTH} characters")
    if normalized == my_friend_id:
        raise ValidationError("You cannot add yourself as a friend")

    my_data = await get_user_document(session, uid) or {}
    if normalized in (my_data.get("friends") or []):
        raise ValidationError("Already friends with this user")

    target_uid = await get_friend_lookup(session, normalized)
    if target_uid is None:
        raise NotFoundError("Friend ID not found")

    target_data = await get_user_document(session, target_uid)
    if target_data is None:
        raise NotFoundError("Friend ID not found", detail="lookup points at a missing profile")
    if _find_request(target_data.get("pendingFriendRequests") or [], my_friend_id):
        raise ValidationError("Friend request already sent")

    request = FriendRequest(
        from_friend_id=my_friend_id,
        from_username=my_username,
        timestamp=_utc_timestamp(),
    )
    await array_union(session, target_uid, "pendingFriendRequests", request.to_dict())

    logger.info("Friend request sent from %s to %s", my_friend_id, normalized)
    return request


async def accept_friend_request(
    session: AsyncSession,
    uid: str,
    my_friend_id: str,
    from_friend_id: str,
) -> None:
    """
    Accept a pending request and link both friends lists.

    Raises NotFoundError if no pending request from from_friend_id exists,
    in which case nothing is written.
    """
    my_data = await get_user_document(session, uid) or {}
    request = _find_request(my_data.get("pendingFriendRequests") or [], from_friend_id)
    if request is None:
        raise NotFoundError("Friend request not found")

    await array_union(session, uid, "friends", from_friend_id)
    await array_remove(session, uid, "pendingFriendRequests", request)

    friend_uid = await get_friend_lookup(session, from_friend_id)
    if friend_uid is not None and await get_user(session, friend_uid) is not None:
        await array_union(session, friend_uid, "friends", my_friend_id)
    else:
        logger.warning(
            "Accepted request from %s but its profile is missing; link is one-sided",
            from_friend_id,
        )

    logger.info("%s accepted friend request from %s", my_friend_id, from_friend_id)


async def decline_friend_request(session: AsyncSession, uid: str, from_friend_id: str) -> None:
    """
    Drop a pending request. The sender is not notified.

    Raises NotFoundError if no pending request from from_friend_id exists.
    """
    my_data = await get_user_document(session, uid) or {}
    request = _find_request(my_data.get("pendingFriendRequests") or [], from_friend_id)
    if request is None:
        raise NotFoundError("Friend request not found")

    await array_remove(session, uid, "pendingFriendRequests", request)
    logger.info("%s declined friend request from %s", uid, from_friend_id)


async def remove_friend(session: AsyncSession, uid: str, friend_id: str) -> None:
    """Remove friend_id from the user's own friends list only."""
    await array_remove(session, uid, "friends", friend_id)
    logger.info("%s removed friend %s", uid, friend_id)


async def load_user_profile(session: AsyncSession, uid: str) -> UserProfile:
    """The user's full profile. A missing document reads as an empty profile."""
    data = await get_user_document(session, uid) or {}
    return UserProfile.from_document(uid, data)


async def get_pending_requests(session: AsyncSession, uid: str) -> list[FriendRequest]:
    profile = await load_user_profile(session, uid)
    return profile.pending_friend_requests


# --- Friend Data ---


async def load_friends_with_profiles(session: AsyncSession, friend_ids: list[str]) -> list[Friend]:
    """
    Resolve friend IDs to usernames.

    IDs whose lookup or profile is missing are skipped, so one broken
    link does not break the whole list.
    """
    friends: list[Friend] = []
    for friend_id in friend_ids:
        friend_uid = await get_friend_lookup(session, friend_id)
        if friend_uid is None:
            logger.warning("Skipping friend %s: no lookup entry", friend_id)
            continue

        data = await get_user_document(session, friend_uid)
        if data is None:
            logger.warning("Skipping friend %s: no profile for %s", friend_id, friend_uid)
            continue

        friends.append(
            Friend(
                friend_id=friend_id,
                username=data.get("username") or UNKNOWN_USERNAME,
                uid=friend_uid,
            )
        )
    return friends


async def get_friend_public_data(session: AsyncSession, friend_id: str) -> FriendPublicData:
    """
    Load a friend's decks and games for read-only stat viewing.

    Raises NotFoundError if the friend ID or its profile is missing.
    """
    friend_uid = await get_friend_lookup(session, friend_id)
    if friend_uid is None:
        raise NotFoundError("Friend not found")

    data = await get_user_document(session, friend_uid)
    if data is None:
        raise NotFoundError("Friend data not found")

    return FriendPublicData(
        friend_id=friend_id,
        username=data.get("username") or UNKNOWN_USERNAME,
        decks=load_decks(data.get("decks")),
        games=load_games(data.get("games")),
    )


# --- Repair ---


@dataclass
class ReconcileReport:
    """What a reconciliation sweep removed."""

    users_checked: int = 0
    orphans_removed: list[tuple[str, str]] = field(default_factory=list)
    one_sided_removed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.orphans_removed or self.one_sided_removed)


async def reconcile_friendships(session: AsyncSession) -> ReconcileReport:
    """
    Remove friends-list entries that no longer form a friendship.

    An entry is an orphan when its friend ID has no lookup or the lookup
    points at a missing profile. It is one-sided when the other profile
    does not list this user back, which is what removing a friend leaves
    behind. Both kinds are dropped. A second run changes nothing.
    """
    report = ReconcileReport()
    users = await list_users(session)
    report.users_checked = len(users)

    by_uid = {u.uid: u for u in users}

    for user in users:
        for friend_id in list(user.friends or []):
            friend_uid = await get_friend_lookup(session, friend_id)
            friend = by_uid.get(friend_uid) if friend_uid else None

            if friend is None:
                await array_remove(session, user.uid, "friends", friend_id)
                report.orphans_removed.append((user.uid, friend_id))
                logger.info("Removed orphan friend %s from %s", friend_id, user.uid)
                continue

            if user.friend_id and user.friend_id not in (friend.friends or []):
                await array_remove(session, user.uid, "friends", friend_id)
                report.one_sided_removed.append((user.uid, friend_id))
                logger.info("Removed one-sided friend %s from %s", friend_id, user.uid)

    return report
