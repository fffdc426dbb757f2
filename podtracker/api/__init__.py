from podtracker.api.buddies import router as buddies_router
from podtracker.api.cards import router as cards_router
from podtracker.api.decks import router as decks_router
from podtracker.api.export import router as export_router
from podtracker.api.friends import router as friends_router
from podtracker.api.games import router as games_router
from podtracker.api.health import router as health_router
from podtracker.api.profile import router as profile_router
from podtracker.api.stats import router as stats_router

__all__ = [
    "buddies_router",
    "cards_router",
    "decks_router",
    "export_router",
    "friends_router",
    "games_router",
    "health_router",
    "profile_router",
    "stats_router",
]
