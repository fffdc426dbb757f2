"""
PodTracker services.

Friend profiles, deck/game/buddy management and card lookups.
"""

from podtracker.services.cache import SessionCache
from podtracker.services.friends import (
    ReconcileReport,
    accept_friend_request,
    decline_friend_request,
    ensure_user_profile,
    generate_friend_id,
    get_friend_public_data,
    load_friends_with_profiles,
    load_user_profile,
    reconcile_friendships,
    remove_friend,
    send_friend_request,
    update_username,
)
from podtracker.services.scryfall import ScryfallClient

__all__ = [
    "ReconcileReport",
    "ScryfallClient",
    "SessionCache",
    "accept_friend_request",
    "decline_friend_request",
    "ensure_user_profile",
    "generate_friend_id",
    "get_friend_public_data",
    "load_friends_with_profiles",
    "load_user_profile",
    "reconcile_friendships",
    "remove_friend",
    "send_friend_request",
    "update_username",
]
