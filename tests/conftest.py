import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from podtracker.db.database import get_session
from podtracker.main import app
from podtracker.models.db import Base
from podtracker.models.records import Game, GameDeck, Opponent
from podtracker.services.scryfall import ScryfallClient


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.state.scryfall = ScryfallClient()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    await app.state.scryfall.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"X-User-Id": "uid-alice", "X-User-Email": "alice@example.com"}


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return {"X-User-Id": "uid-bob", "X-User-Email": "bob@example.com"}


DEFAULT_DECK = GameDeck(
    id=1,
    name="Atraxa Superfriends",
    commander_name="Atraxa, Praetors' Voice",
    commander_color_identity=["W", "U", "B", "G"],
)


def _make_game(
    game_id: int,
    date: str,
    won: bool,
    deck: GameDeck = DEFAULT_DECK,
    opponents: list[Opponent] | None = None,
    winner_color_identity: str = "C",
    winning_commander: str | None = None,
) -> Game:
    """Build a game with sensible defaults for statistics tests."""
    opponents = opponents or []
    return Game(
        id=game_id,
        date=date,
        my_deck=deck,
        won=won,
        winner_color_identity=winner_color_identity,
        opponents=opponents,
        total_players=len(opponents) + 1,
        winning_commander=winning_commander,
    )


@pytest.fixture
def make_game():
    """Factory for Game records."""
    return _make_game
