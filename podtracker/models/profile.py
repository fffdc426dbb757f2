"""
Profile and friendship records.

A user profile document holds the short friend ID, the display name, the
friends list, incoming friend requests, and the user's decks, games and
pod buddies.
"""

from dataclasses import dataclass, field
from typing import Any

from podtracker.models.records import Deck, Game, load_decks, load_games

# Excludes visually ambiguous characters: 0, O, 1, I, L
FRIEND_ID_CHARS = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
FRIEND_ID_LENGTH = 8


@dataclass(frozen=True, slots=True)
class FriendRequest:
    """An incoming friend request, stored in the recipient's profile."""

    from_friend_id: str
    from_username: str
    timestamp: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FriendRequest":
        return cls(
            from_friend_id=data.get("fromFriendId", ""),
            from_username=data.get("fromUsername", ""),
            timestamp=data.get("timestamp", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromFriendId": self.from_friend_id,
            "fromUsername": self.from_username,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True, slots=True)
class Friend:
    friend_id: str
    username: str
    uid: str


@dataclass(frozen=True, slots=True)
class FriendPublicData:
    """A friend's read-only data for stat viewing."""

    friend_id: str
    username: str
    decks: list[Deck] = field(default_factory=list)
    games: list[Game] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ProfileData:
    friend_id: str
    username: str


@dataclass
class UserProfile:
    """Full view of a stored user profile document."""

    uid: str
    email: str = ""
    friend_id: str | None = None
    username: str | None = None
    friends: list[str] = field(default_factory=list)
    pending_friend_requests: list[FriendRequest] = field(default_factory=list)
    decks: list[Deck] = field(default_factory=list)
    games: list[Game] = field(default_factory=list)
    pod_buddies: list[str] = field(default_factory=list)

    @classmethod
    def from_document(cls, uid: str, data: dict[str, Any]) -> "UserProfile":
        return cls(
            uid=uid,
            email=data.get("email") or "",
            friend_id=data.get("friendId"),
            username=data.get("username"),
            friends=list(data.get("friends") or []),
            pending_friend_requests=[
                FriendRequest.from_dict(r) for r in data.get("pendingFriendRequests") or []
            ],
            decks=load_decks(data.get("decks")),
            games=load_games(data.get("games")),
            pod_buddies=list(data.get("podBuddies") or []),
        )
