"""
Statistics API endpoints.

Loads the caller's games once per request and runs every aggregation over
the filtered snapshot.
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.analysis.filters import (
    GameFilter,
    available_years,
    commander_suggestions,
    filter_games,
    opponent_names,
)
from podtracker.analysis.stats import (
    compute_buddy_stats,
    compute_color_stats,
    compute_deck_stats,
    compute_lifetime_gp,
    compute_monthly_stats,
    compute_most_faced_commanders,
    compute_overview_stats,
    merge_unplayed_decks,
)
from podtracker.api.dependencies import CurrentUserDep
from podtracker.api.schemas import (
    BuddyStatModel,
    ColorGradientModel,
    ColorStatModel,
    DeckStatModel,
    FacedCommanderStatModel,
    LifetimeGPResponse,
    MonthlyStatModel,
    OverviewStatsModel,
    StatsFiltersResponse,
    StatsResponse,
)
from podtracker.db.database import get_session
from podtracker.models.color import (
    build_color_gradient_defs,
    format_color_identity_label,
    get_color_gradient_fill,
    get_color_identity_name,
)
from podtracker.models.records import Deck, Game
from podtracker.services.library import load_user_decks, load_user_games

router = APIRouter(prefix="/stats", tags=["stats"])


def build_stats_response(
    games: list[Game],
    decks: list[Deck],
    game_filter: GameFilter,
) -> StatsResponse:
    """Run every aggregation over the games matching game_filter."""
    filtered = filter_games(games, game_filter)

    deck_stats = compute_deck_stats(filtered)
    if not game_filter.is_active:
        deck_stats = merge_unplayed_decks(deck_stats, decks)

    colors = [
        ColorStatModel(
            color=stat.color,
            count=stat.count,
            name=get_color_identity_name(stat.color),
            label=format_color_identity_label(stat.color),
            fill=get_color_gradient_fill(stat.color),
        )
        for stat in compute_color_stats(filtered)
    ]

    overview = compute_overview_stats(filtered, decks)
    monthly = compute_monthly_stats(filtered)

    return StatsResponse(
        filter_label=game_filter.label(),
        game_count=len(filtered),
        overview=OverviewStatsModel.model_validate(asdict(overview)),
        decks=[DeckStatModel.model_validate(asdict(s)) for s in deck_stats],
        monthly=[MonthlyStatModel.model_validate(asdict(s)) for s in monthly],
        colors=colors,
        color_gradients=[
            ColorGradientModel.model_validate(g)
            for g in build_color_gradient_defs([c.color for c in colors])
        ],
        most_faced_commanders=[
            FacedCommanderStatModel.model_validate(asdict(s))
            for s in compute_most_faced_commanders(filtered)
        ],
        buddies=[BuddyStatModel.model_validate(asdict(s)) for s in compute_buddy_stats(filtered)],
    )


@router.get("", response_model=StatsResponse)
async def get_stats(
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
    year: Annotated[str | None, Query(pattern=r"^\d{4}$")] = None,
    buddy: str | None = None,
    commander: str | None = None,
) -> StatsResponse:
    """
    Get statistics for the caller's games.

    Optional filters narrow the games by year, opponent name, or opposing
    commander before aggregation. Unplayed decks are listed only when no
    filter is active.
    """
    games = await load_user_games(session, user.uid)
    decks = await load_user_decks(session, user.uid)
    return build_stats_response(
        games, decks, GameFilter(year=year, buddy=buddy, commander=commander)
    )


@router.get("/lifetime", response_model=LifetimeGPResponse)
async def get_lifetime_games_played(
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> LifetimeGPResponse:
    """Games played per month, one series per year."""
    lifetime = compute_lifetime_gp(await load_user_games(session, user.uid))
    return LifetimeGPResponse(
        data=[{"month": point.month, **point.counts} for point in lifetime.data],
        years=lifetime.years,
    )


@router.get("/filters", response_model=StatsFiltersResponse)
async def get_stats_filters(
    user: CurrentUserDep,
    session: Annotated[AsyncSession, Depends(get_session)],
    commander_query: Annotated[str, Query(alias="commanderQuery")] = "",
) -> StatsFiltersResponse:
    """Values offered by the year, buddy and commander filters."""
    games = await load_user_games(session, user.uid)
    return StatsFiltersResponse(
        years=available_years(games),
        opponent_names=opponent_names(games),
        commander_suggestions=commander_suggestions(games, commander_query),
    )
