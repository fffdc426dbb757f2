"""
Pod buddy API endpoints.

Pod buddies are the names offered when recording who sat at the table.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.api.dependencies import CurrentUserDep
from podtracker.api.schemas import BuddyListResponse, BuddyRequest
from podtracker.db.database import get_session
from podtracker.services.library import add_buddy, load_buddies, remove_buddy

router = APIRouter(prefix="/buddies", tags=["buddies"])


@router.get("", response_model=BuddyListResponse)
async def list_buddies(
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BuddyListResponse:
    return BuddyListResponse(pod_buddies=await load_buddies(session, user.uid))


@router.post("", response_model=BuddyListResponse)
async def create_buddy(
    request: BuddyRequest,
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BuddyListResponse:
    """Add a buddy. Blank names and case-insensitive repeats are ignored."""
    return BuddyListResponse(pod_buddies=await add_buddy(session, user.uid, request.name))


@router.delete("/{name}", response_model=BuddyListResponse)
async def delete_buddy(
    name: str,
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BuddyListResponse:
    return BuddyListResponse(pod_buddies=await remove_buddy(session, user.uid, name))
