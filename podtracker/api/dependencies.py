"""
Shared request dependencies.

The auth provider sits in front of this service and forwards the signed-in
user's key and email as headers.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request

from podtracker.models.failure import FailureKind, KnownError
from podtracker.services.scryfall import ScryfallClient


@dataclass(frozen=True, slots=True)
class CurrentUser:
    uid: str
    email: str


async def get_current_user(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_email: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Identify the caller. Raises a 401 KnownError when no user key is sent."""
    if not x_user_id or not x_user_id.strip():
        raise KnownError(
            kind=FailureKind.UNAUTHENTICATED,
            message="Sign in required",
            detail="Missing X-User-Id header",
            status_code=401,
        )
    return CurrentUser(uid=x_user_id.strip(), email=(x_user_email or "").strip())


def get_scryfall_client(request: Request) -> ScryfallClient:
    """The app-wide Scryfall client created at startup."""
    client: ScryfallClient = request.app.state.scryfall
    return client


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
ScryfallDep = Annotated[ScryfallClient, Depends(get_scryfall_client)]
