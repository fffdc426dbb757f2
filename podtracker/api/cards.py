"""
Card data API endpoints.

Thin wrappers over the cached Scryfall client. Lookups that fail upstream
come back empty rather than as errors.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from podtracker.api.dependencies import CurrentUserDep, ScryfallDep
from podtracker.api.schemas import CardImageResponse, CommanderModel, CommanderSearchResponse
from podtracker.models.failure import NotFoundError

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/commanders/search", response_model=CommanderSearchResponse)
async def search_commanders(
    _user: CurrentUserDep,
    scryfall: ScryfallDep,
    q: Annotated[str, Query(max_length=100)] = "",
) -> CommanderSearchResponse:
    """Commander name suggestions. Queries under two characters return nothing."""
    return CommanderSearchResponse(query=q, names=await scryfall.search_commander_names(q))


@router.get("/commanders/{name}", response_model=CommanderModel)
async def get_commander(name: str, _user: CurrentUserDep, scryfall: ScryfallDep) -> CommanderModel:
    commander = await scryfall.fetch_commander_by_name(name)
    if commander is None:
        raise NotFoundError("Commander not found", detail=name)
    return CommanderModel.model_validate(commander.to_dict())


@router.get("/image", response_model=CardImageResponse)
async def get_card_image(
    _user: CurrentUserDep,
    scryfall: ScryfallDep,
    name: Annotated[str, Query(min_length=1)],
) -> CardImageResponse:
    """Art-crop image URL for a card, or null when Scryfall has none."""
    return CardImageResponse(name=name, url=await scryfall.fetch_card_image_url(name))
