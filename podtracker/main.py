from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from podtracker.api import (
    buddies_router,
    cards_router,
    decks_router,
    export_router,
    friends_router,
    games_router,
    health_router,
    profile_router,
    stats_router,
)
from podtracker.config import settings
from podtracker.db.database import init_db
from podtracker.models.failure import KnownError
from podtracker.services.scryfall import ScryfallClient


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    app.state.scryfall = ScryfallClient()
    yield
    await app.state.scryfall.aclose()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("podtracker"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )


app.include_router(buddies_router)
app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(export_router)
app.include_router(friends_router)
app.include_router(games_router)
app.include_router(health_router)
app.include_router(profile_router)
app.include_router(stats_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
