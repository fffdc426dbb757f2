"""
Profile API endpoints.

The first profile read assigns the caller a friend ID.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.api.dependencies import CurrentUserDep
from podtracker.api.schemas import ProfileResponse, UsernameRequest
from podtracker.db.database import get_session
from podtracker.services.friends import ensure_user_profile, update_username

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProfileResponse:
    """
    Get the caller's friend ID and username.

    Creates the profile on first call. Later calls return it unchanged.
    """
    profile = await ensure_user_profile(session, user.uid, user.email)
    return ProfileResponse(friend_id=profile.friend_id, username=profile.username)


@router.put("/username", response_model=ProfileResponse)
async def set_username(
    request: UsernameRequest,
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProfileResponse:
    profile = await ensure_user_profile(session, user.uid, user.email)
    username = await update_username(session, user.uid, request.username)
    return ProfileResponse(friend_id=profile.friend_id, username=username)
