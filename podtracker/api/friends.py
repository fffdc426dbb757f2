"""
Friend API endpoints.

Friend requests, the friends list, and read-only stats for a friend.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.analysis.filters import GameFilter
from podtracker.api.dependencies import CurrentUserDep
from podtracker.api.schemas import (
    DeckModel,
    FriendModel,
    FriendRequestCreate,
    FriendRequestModel,
    FriendStatsResponse,
)
from podtracker.api.stats import build_stats_response
from podtracker.db.database import get_session
from podtracker.services.friends import (
    accept_friend_request,
    decline_friend_request,
    ensure_user_profile,
    get_friend_public_data,
    get_pending_requests,
    load_friends_with_profiles,
    load_user_profile,
    normalize_friend_id,
    remove_friend,
    send_friend_request,
)
from podtracker.services.library import sort_decks

router = APIRouter(prefix="/friends", tags=["friends"])

SessionDep = Annotated[AsyncSession, Depends(get_session)]


@router.get("", response_model=list[FriendModel])
async def list_friends(user: CurrentUserDep, session: SessionDep) -> list[FriendModel]:
    """Friends with resolvable profiles. Broken links are left out."""
    profile = await load_user_profile(session, user.uid)
    friends = await load_friends_with_profiles(session, profile.friends)
    return [FriendModel(friend_id=f.friend_id, username=f.username) for f in friends]


@router.get("/requests", response_model=list[FriendRequestModel])
async def list_requests(user: CurrentUserDep, session: SessionDep) -> list[FriendRequestModel]:
    requests = await get_pending_requests(session, user.uid)
    return [FriendRequestModel.model_validate(r) for r in requests]


@router.post(
    "/requests",
    response_model=FriendRequestModel,
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    request: FriendRequestCreate,
    user: CurrentUserDep,
    session: SessionDep,
) -> FriendRequestModel:
    """
    Send a friend request by friend ID.

    The ID is matched case-insensitively. Fails with 400 for malformed,
    self, existing-friend or repeated requests, and 404 for unknown IDs.
    """
    profile = await ensure_user_profile(session, user.uid, user.email)
    sent = await send_friend_request(
        session,
        user.uid,
        profile.friend_id,
        profile.username,
        request.friend_id,
    )
    return FriendRequestModel.model_validate(sent)


@router.post("/requests/{from_friend_id}/accept", status_code=status.HTTP_204_NO_CONTENT)
async def accept_request(
    from_friend_id: str,
    user: CurrentUserDep,
    session: SessionDep,
) -> None:
    profile = await ensure_user_profile(session, user.uid, user.email)
    await accept_friend_request(
        session, user.uid, profile.friend_id, normalize_friend_id(from_friend_id)
    )


@router.post("/requests/{from_friend_id}/decline", status_code=status.HTTP_204_NO_CONTENT)
async def decline_request(
    from_friend_id: str,
    user: CurrentUserDep,
    session: SessionDep,
) -> None:
    await decline_friend_request(session, user.uid, normalize_friend_id(from_friend_id))


@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_friend(friend_id: str, user: CurrentUserDep, session: SessionDep) -> None:
    """Unfriend. Only the caller's own list changes."""
    await remove_friend(session, user.uid, normalize_friend_id(friend_id))


@router.get("/{friend_id}/stats", response_model=FriendStatsResponse)
async def get_friend_stats(
    friend_id: str,
    user: CurrentUserDep,
    session: SessionDep,
    year: Annotated[str | None, Query(pattern=r"^\d{4}$")] = None,
    buddy: str | None = None,
    commander: str | None = None,
) -> FriendStatsResponse:
    """
    A friend's decks and statistics, read-only.

    Runs the same aggregations as the caller's own stats page.
    """
    friend = await get_friend_public_data(session, normalize_friend_id(friend_id))
    decks = sort_decks(friend.decks)
    stats = build_stats_response(
        friend.games,
        decks,
        GameFilter(year=year, buddy=buddy, commander=commander),
    )
    return FriendStatsResponse(
        friend_id=friend.friend_id,
        username=friend.username,
        decks=[DeckModel.model_validate(d.to_dict()) for d in decks],
        stats=stats,
    )
