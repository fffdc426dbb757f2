"""
Data export endpoints.

Return the caller's data as downloadable CSV or JSON.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.api.dependencies import CurrentUserDep
from podtracker.db.database import get_session
from podtracker.parsers.export import (
    all_data_to_json,
    decks_to_json,
    export_filename,
    games_to_csv,
    games_to_json,
)
from podtracker.services.library import load_buddies, load_user_decks, load_user_games

router = APIRouter(prefix="/export", tags=["export"])

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def _download(body: str, media_type: str, filename: str) -> Response:
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/games")
async def export_games(
    user: CurrentUserDep,
    session: SessionDep,
    fmt: Annotated[Literal["csv", "json"], Query(alias="format")] = "csv",
) -> Response:
    games = await load_user_games(session, user.uid)
    if fmt == "csv":
        return _download(games_to_csv(games), "text/csv", export_filename("games", "csv"))
    return _download(games_to_json(games), "application/json", export_filename("games", "json"))


@router.get("/decks")
async def export_decks(user: CurrentUserDep, session: SessionDep) -> Response:
    decks = await load_user_decks(session, user.uid)
    return _download(decks_to_json(decks), "application/json", export_filename("decks", "json"))


@router.get("/all")
async def export_all(user: CurrentUserDep, session: SessionDep) -> Response:
    """Games, decks and pod buddies in one JSON document."""
    games = await load_user_games(session, user.uid)
    decks = await load_user_decks(session, user.uid)
    buddies = await load_buddies(session, user.uid)
    return _download(
        all_data_to_json(games, decks, buddies),
        "application/json",
        export_filename("all", "json"),
    )
