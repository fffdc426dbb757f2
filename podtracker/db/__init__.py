from podtracker.db.database import get_session, init_db
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
    user_to_document,
)

__all__ = [
    "array_remove",
    "array_union",
    "create_friend_lookup",
    "friend_id_exists",
    "get_friend_lookup",
    "get_session",
    "get_user",
    "get_user_document",
    "init_db",
    "list_users",
    "set_user_document",
    "user_to_document",
]
