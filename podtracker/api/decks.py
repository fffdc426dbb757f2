"""
Deck library API endpoints.

Provides endpoints for listing, adding, archiving, reordering and deleting
decks, and for attaching a pasted decklist to a deck.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.api.dependencies import CurrentUserDep
from podtracker.api.schemas import (
    DeckCreateRequest,
    DeckModel,
    DecklistImportRequest,
    DecklistImportResponse,
    DeckOrderRequest,
)
from podtracker.db.database import get_session
from podtracker.models.failure import ValidationError
from podtracker.models.records import Deck
from podtracker.parsers.decklist import cards_to_decklist, parse_decklist_text
from podtracker.services.library import (
    add_deck,
    delete_deck,
    load_user_decks,
    toggle_archive,
    update_deck_order,
    update_decklist,
)

router = APIRouter(prefix="/decks", tags=["decks"])

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def deck_to_model(deck: Deck) -> DeckModel:
    return DeckModel.model_validate(deck.to_dict())


@router.get("", response_model=list[DeckModel])
async def list_decks(
    user: CurrentUserDep,
    session: SessionDep,
    include_archived: bool = True,
) -> list[DeckModel]:
    """The caller's decks in their saved order."""
    decks = await load_user_decks(session, user.uid)
    if not include_archived:
        decks = [d for d in decks if not d.is_archived]
    return [deck_to_model(d) for d in decks]


@router.post("", response_model=DeckModel, status_code=status.HTTP_201_CREATED)
async def create_deck(
    request: DeckCreateRequest,
    user: CurrentUserDep,
    session: SessionDep,
) -> DeckModel:
    deck = await add_deck(session, user.uid, request.name, request.commander.to_record())
    return deck_to_model(deck)


@router.put("/order", response_model=list[DeckModel])
async def reorder_decks(
    request: DeckOrderRequest,
    user: CurrentUserDep,
    session: SessionDep,
) -> list[DeckModel]:
    """Save a manual deck order. Unlisted decks keep their relative order at the end."""
    decks = await update_deck_order(session, user.uid, request.deck_ids)
    return [deck_to_model(d) for d in decks]


@router.post("/{deck_id}/archive", response_model=DeckModel)
async def archive_deck(deck_id: int, user: CurrentUserDep, session: SessionDep) -> DeckModel:
    """Flip the archived flag on a deck."""
    return deck_to_model(await toggle_archive(session, user.uid, deck_id))


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_deck(deck_id: int, user: CurrentUserDep, session: SessionDep) -> None:
    await delete_deck(session, user.uid, deck_id)


@router.put("/{deck_id}/decklist", response_model=DecklistImportResponse)
async def import_decklist(
    deck_id: int,
    request: DecklistImportRequest,
    user: CurrentUserDep,
    session: SessionDep,
) -> DecklistImportResponse:
    """
    Attach a pasted decklist to a deck.

    Lines that do not parse are reported back rather than rejected. A total
    far from 100 cards is flagged but still saved.
    """
    parsed = parse_decklist_text(request.text)
    if not parsed.cards:
        raise ValidationError(
            "No cards found in decklist",
            detail=f"{len(parsed.invalid_lines)} lines could not be parsed",
        )

    deck = await update_decklist(
        session, user.uid, deck_id, cards_to_decklist(parsed.cards, raw_text=request.text)
    )
    return DecklistImportResponse(
        deck=deck_to_model(deck),
        invalid_lines=parsed.invalid_lines,
        total_cards=parsed.total_cards(),
        total_looks_off=parsed.total_looks_off,
    )
