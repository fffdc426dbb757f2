"""
Game log API endpoints.

A game stores a snapshot of the deck it was played with, so later deck
edits or deletions never change history.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.api.dependencies import CurrentUserDep
from podtracker.api.schemas import GameModel, GameRequest, game_to_model
from podtracker.db.database import get_session
from podtracker.models.color import normalize_color_identity
from podtracker.models.failure import NotFoundError
from podtracker.models.records import (
    Game,
    GameDeck,
    derive_winner_color_identity,
)
from podtracker.services.library import (
    add_game,
    delete_game,
    edit_game,
    load_user_decks,
    load_user_games,
    pod_size,
)

router = APIRouter(prefix="/games", tags=["games"])

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def _snapshot_deck(
    session: AsyncSession,
    uid: str,
    deck_id: int,
    existing: GameDeck | None = None,
) -> GameDeck:
    """Snapshot the deck by id, falling back to an existing snapshot of the same deck."""
    for deck in await load_user_decks(session, uid):
        if deck.id == deck_id:
            return GameDeck.from_deck(deck)
    if existing is not None and existing.id == deck_id:
        return existing
    raise NotFoundError("Deck not found", detail=f"deck_id={deck_id}")


def _requested_identity(request: GameRequest) -> str | None:
    if request.winner_color_identity is None:
        return None
    return normalize_color_identity(request.winner_color_identity)


@router.get("", response_model=list[GameModel])
async def list_games(user: CurrentUserDep, session: SessionDep) -> list[GameModel]:
    """All of the caller's games in stored order."""
    return [game_to_model(g) for g in await load_user_games(session, user.uid)]


@router.post("", response_model=GameModel, status_code=status.HTTP_201_CREATED)
async def create_game(
    request: GameRequest,
    user: CurrentUserDep,
    session: SessionDep,
) -> GameModel:
    """
    Log a game played with one of the caller's decks.

    totalPlayers defaults to the opponent count plus one. The winner's
    color identity is derived when not given.
    """
    my_deck = await _snapshot_deck(session, user.uid, request.deck_id)
    game = await add_game(
        session,
        user.uid,
        game_date=request.date,
        my_deck=my_deck,
        won=request.won,
        opponents=[o.to_record() for o in request.opponents],
        total_players=request.total_players,
        winning_commander=request.winning_commander,
        winner_color_identity=_requested_identity(request),
    )
    return game_to_model(game)


@router.put("/{game_id}", response_model=GameModel)
async def update_game(
    game_id: int,
    request: GameRequest,
    user: CurrentUserDep,
    session: SessionDep,
) -> GameModel:
    games = await load_user_games(session, user.uid)
    existing = next((g for g in games if g.id == game_id), None)
    if existing is None:
        raise NotFoundError("Game not found", detail=f"game_id={game_id}")

    my_deck = await _snapshot_deck(session, user.uid, request.deck_id, existing.my_deck)
    opponents = [o.to_record() for o in request.opponents]
    winning_commander = None if request.won else request.winning_commander
    game = Game(
        id=game_id,
        date=request.date,
        my_deck=my_deck,
        won=request.won,
        winner_color_identity=_requested_identity(request)
        or derive_winner_color_identity(request.won, my_deck, winning_commander, opponents),
        opponents=opponents,
        total_players=pod_size(request.total_players, opponents),
        winning_commander=winning_commander,
    )
    return game_to_model(await edit_game(session, user.uid, game))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_game(game_id: int, user: CurrentUserDep, session: SessionDep) -> None:
    await delete_game(session, user.uid, game_id)
