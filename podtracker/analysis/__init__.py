from podtracker.analysis.filters import GameFilter, filter_games
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

__all__ = [
    "GameFilter",
    "compute_buddy_stats",
    "compute_color_stats",
    "compute_deck_stats",
    "compute_lifetime_gp",
    "compute_monthly_stats",
    "compute_most_faced_commanders",
    "compute_overview_stats",
    "filter_games",
    "merge_unplayed_decks",
]
