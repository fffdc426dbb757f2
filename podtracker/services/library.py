"""
Deck, game and pod buddy management.

Each list lives whole inside the user's profile document. Every change
reads the list, edits it, and writes the full list back. Ids are assigned
as max(existing)+1 and never reused within the current list.
"""

import dataclasses
import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.db.operations import get_user_document, set_user_document
from podtracker.models.failure import NotFoundError, ValidationError
from podtracker.models.records import (
    Commander,
    Deck,
    Decklist,
    Game,
    GameDeck,
    Opponent,
    derive_winner_color_identity,
    load_decks,
    load_games,
)

logger = logging.getLogger(__name__)


def next_id(ids: list[int]) -> int:
    return max(ids) + 1 if ids else 1


def sort_decks(decks: list[Deck]) -> list[Deck]:
    """Manual sort order first; decks without one keep their order at the end."""
    return sorted(decks, key=lambda d: (d.sort_order is None, d.sort_order or 0))


def pod_size(total_players: int | None, opponents: list[Opponent]) -> int:
    """The pod size as given, or the opponents plus the user when not given."""
    return total_players if total_players is not None else len(opponents) + 1


# --- Decks ---


async def load_user_decks(session: AsyncSession, uid: str) -> list[Deck]:
    data = await get_user_document(session, uid) or {}
    return sort_decks(load_decks(data.get("decks")))


async def _save_decks(session: AsyncSession, uid: str, decks: list[Deck]) -> list[Deck]:
    await set_user_document(session, uid, {"decks": [d.to_dict() for d in decks]}, merge=True)
    return decks


def _find_deck(decks: list[Deck], deck_id: int) -> Deck:
    for deck in decks:
        if deck.id == deck_id:
            return deck
    raise NotFoundError("Deck not found", detail=f"deck_id={deck_id}")


async def add_deck(
    session: AsyncSession,
    uid: str,
    name: str,
    commander: Commander,
    today: date | None = None,
) -> Deck:
    """Add a deck to the user's library."""
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Deck name cannot be empty")

    decks = await load_user_decks(session, uid)
    deck = Deck(
        id=next_id([d.id for d in decks]),
        name=trimmed,
        commander=commander,
        date_added=(today or date.today()).isoformat(),
    )
    await _save_decks(session, uid, [*decks, deck])
    logger.info("Added deck %d (%s) for %s", deck.id, deck.name, uid)
    return deck


async def toggle_archive(session: AsyncSession, uid: str, deck_id: int) -> Deck:
    decks = await load_user_decks(session, uid)
    target = _find_deck(decks, deck_id)
    updated = dataclasses.replace(target, archived=not target.is_archived)
    await _save_decks(session, uid, [updated if d.id == deck_id else d for d in decks])
    return updated


async def delete_deck(session: AsyncSession, uid: str, deck_id: int) -> None:
    """
    Delete a deck. Recorded games keep their snapshot of it.

    Raises NotFoundError if the deck does not exist.
    """
    decks = await load_user_decks(session, uid)
    _find_deck(decks, deck_id)
    await _save_decks(session, uid, [d for d in decks if d.id != deck_id])
    logger.info("Deleted deck %d for %s", deck_id, uid)


async def update_decklist(
    session: AsyncSession, uid: str, deck_id: int, decklist: Decklist
) -> Deck:
    decks = await load_user_decks(session, uid)
    updated = dataclasses.replace(_find_deck(decks, deck_id), decklist=decklist)
    await _save_decks(session, uid, [updated if d.id == deck_id else d for d in decks])
    return updated


async def update_deck_order(session: AsyncSession, uid: str, deck_ids: list[int]) -> list[Deck]:
    """
    Reorder the library.

    deck_ids lists decks in their new order; each gets a dense 0-based
    sort_order. Decks not listed follow in their current order.
    """
    decks = await load_user_decks(session, uid)
    by_id = {d.id: d for d in decks}
    unknown = [i for i in deck_ids if i not in by_id]
    if unknown:
        raise NotFoundError("Deck not found", detail=f"deck_ids={unknown}")

    ordered_ids = list(dict.fromkeys(deck_ids))
    listed = set(ordered_ids)
    ordered_ids += [d.id for d in decks if d.id not in listed]
    reordered = [
        dataclasses.replace(by_id[deck_id], sort_order=rank)
        for rank, deck_id in enumerate(ordered_ids)
    ]
    return await _save_decks(session, uid, reordered)


# --- Games ---


async def load_user_games(session: AsyncSession, uid: str) -> list[Game]:
    data = await get_user_document(session, uid) or {}
    return load_games(data.get("games"))


async def _save_games(session: AsyncSession, uid: str, games: list[Game]) -> None:
    await set_user_document(session, uid, {"games": [g.to_dict() for g in games]}, merge=True)


async def add_game(
    session: AsyncSession,
    uid: str,
    game_date: str,
    my_deck: GameDeck,
    won: bool,
    opponents: list[Opponent],
    total_players: int | None = None,
    winning_commander: str | None = None,
    winner_color_identity: str | None = None,
) -> Game:
    """
    Log a game.

    winning_commander is kept only for losses. When winner_color_identity
    is not given it is derived from the winning side.
    """
    if won:
        winning_commander = None

    games = await load_user_games(session, uid)
    game = Game(
        id=next_id([g.id for g in games]),
        date=game_date,
        my_deck=my_deck,
        won=won,
        winner_color_identity=winner_color_identity
        or derive_winner_color_identity(won, my_deck, winning_commander, opponents),
        opponents=list(opponents),
        total_players=pod_size(total_players, opponents),
        winning_commander=winning_commander,
    )
    await _save_games(session, uid, [*games, game])
    logger.info("Logged game %d for %s (%s)", game.id, uid, "win" if won else "loss")
    return game


async def edit_game(session: AsyncSession, uid: str, game: Game) -> Game:
    """Replace a stored game wholesale. Raises NotFoundError for unknown ids."""
    games = await load_user_games(session, uid)
    if not any(g.id == game.id for g in games):
        raise NotFoundError("Game not found", detail=f"game_id={game.id}")
    await _save_games(session, uid, [game if g.id == game.id else g for g in games])
    return game


async def delete_game(session: AsyncSession, uid: str, game_id: int) -> None:
    games = await load_user_games(session, uid)
    remaining = [g for g in games if g.id != game_id]
    if len(remaining) == len(games):
        raise NotFoundError("Game not found", detail=f"game_id={game_id}")
    await _save_games(session, uid, remaining)
    logger.info("Deleted game %d for %s", game_id, uid)


# --- Pod Buddies ---


async def load_buddies(session: AsyncSession, uid: str) -> list[str]:
    data = await get_user_document(session, uid) or {}
    return list(data.get("podBuddies") or [])


async def add_buddy(session: AsyncSession, uid: str, name: str) -> list[str]:
    """Add a pod buddy. Blank names and case-insensitive duplicates are ignored."""
    buddies = await load_buddies(session, uid)
    trimmed = name.strip()
    if not trimmed or trimmed.lower() in {b.lower() for b in buddies}:
        return buddies

    updated = [*buddies, trimmed]
    await set_user_document(session, uid, {"podBuddies": updated}, merge=True)
    return updated


async def remove_buddy(session: AsyncSession, uid: str, name: str) -> list[str]:
    buddies = await load_buddies(session, uid)
    updated = [b for b in buddies if b != name]
    if len(updated) != len(buddies):
        await set_user_document(session, uid, {"podBuddies": updated}, merge=True)
    return updated
