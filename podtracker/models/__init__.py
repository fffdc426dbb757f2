from podtracker.models.color import (
    COLOR_IDENTITY_NAMES,
    WUBRG,
    ManaColor,
    format_color_identity_label,
    get_color_identity_name,
    normalize_color_identity,
)
from podtracker.models.failure import (
    FailureDetail,
    FailureKind,
    FriendIdExhaustedError,
    KnownError,
    NotFoundError,
    ValidationError,
)
from podtracker.models.profile import (
    Friend,
    FriendPublicData,
    FriendRequest,
    ProfileData,
    UserProfile,
)
from podtracker.models.records import (
    Commander,
    Deck,
    Decklist,
    Game,
    GameDeck,
    Opponent,
    load_decks,
    load_games,
)

__all__ = [
    "COLOR_IDENTITY_NAMES",
    "Commander",
    "Deck",
    "Decklist",
    "FailureDetail",
    "FailureKind",
    "Friend",
    "FriendIdExhaustedError",
    "FriendPublicData",
    "FriendRequest",
    "Game",
    "GameDeck",
    "KnownError",
    "ManaColor",
    "NotFoundError",
    "Opponent",
    "ProfileData",
    "UserProfile",
    "ValidationError",
    "WUBRG",
    "format_color_identity_label",
    "get_color_identity_name",
    "load_decks",
    "load_games",
    "normalize_color_identity",
]
