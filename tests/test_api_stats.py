"""Tests for statistics API endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from podtracker.db.operations import set_user_document


@pytest.fixture
async def seeded(client: AsyncClient, alice_headers: dict[str, str]) -> None:
    """Two decks, three games across two years."""
    goblins = await client.post(
        "/decks",
        json={"name": "Goblins", "commander": {"name": "Krenko", "colorIdentity": ["R"]}},
        headers=alice_headers,
    )
    await client.post(
        "/decks",
        json={"name": "Ninjas", "commander": {"name": "Yuriko", "colorIdentity": ["U", "B"]}},
        headers=alice_headers,
    )
    deck_id = goblins.json()["id"]
    games = [
        {
            "date": "2023-12-30",
            "deckId": deck_id,
            "won": True,
            "opponents": [{"name": "Bob", "commander": "Atraxa"}],
        },
        {
            "date": "2024-01-02",
            "deckId": deck_id,
            "won": True,
            "opponents": [{"name": "Bob", "commander": "Atraxa"}],
        },
        {
            "date": "2024-01-03",
            "deckId": deck_id,
            "won": False,
            "opponents": [
                {"name": "Carol", "commander": "Edgar", "colorIdentity": ["W", "B", "R"]}
            ],
            "winningCommander": "Edgar",
        },
    ]
    for game in games:
        response = await client.post("/games", json=game, headers=alice_headers)
        assert response.status_code == 201


@pytest.mark.usefixtures("seeded")
class TestStatsEndpoint:
    async def test_unfiltered(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.get("/stats", headers=alice_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["filterLabel"] is None
        assert body["gameCount"] == 3
        assert body["overview"]["currentStreak"] == "1L"
        assert body["overview"]["longestWinStreak"] == 2
        assert body["overview"]["winRate"] == 67
        # Unplayed decks are listed after played ones
        assert [d["deckName"] for d in body["decks"]] == ["Goblins", "Ninjas"]
        assert body["decks"][1]["total"] == 0
        assert [m["month"] for m in body["monthly"]] == ["Dec '23", "Jan '24"]
        assert {c["color"] for c in body["colors"]} == {"R", "WBR"}
        assert body["mostFacedCommanders"][0]["commanderName"] == "Atraxa"
        assert body["buddies"][0] == {
            "buddyName": "Bob",
            "wins": 2,
            "losses": 0,
            "total": 2,
            "winRate": 100,
        }

    async def test_color_chart_fills(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        """Mono colors get a solid fill; multicolor winners reference a gradient."""
        body = (await client.get("/stats", headers=alice_headers)).json()

        fills = {c["color"]: c["fill"] for c in body["colors"]}
        assert fills == {"R": "#D3202A", "WBR": "url(#mtg-grad-WBR)"}
        assert body["colorGradients"] == [
            {
                "id": "mtg-grad-WBR",
                "stops": [
                    {"offset": "0%", "color": "#F9FAF4"},
                    {"offset": "50%", "color": "#150B00"},
                    {"offset": "100%", "color": "#D3202A"},
                ],
            }
        ]

    async def test_filtered_by_year(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        response = await client.get("/stats?year=2024", headers=alice_headers)

        body = response.json()
        assert body["filterLabel"] == "2024 Stats"
        assert body["gameCount"] == 2
        # Filtered views only show decks that were played
        assert [d["deckName"] for d in body["decks"]] == ["Goblins"]

    async def test_filtered_by_buddy_and_commander(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        by_buddy = await client.get("/stats", params={"buddy": "Carol"}, headers=alice_headers)
        by_commander = await client.get(
            "/stats", params={"commander": "atraxa"}, headers=alice_headers
        )

        assert by_buddy.json()["gameCount"] == 1
        assert by_commander.json()["gameCount"] == 2

    async def test_invalid_year(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.get("/stats?year=24", headers=alice_headers)

        assert response.status_code == 422

    async def test_lifetime(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.get("/stats/lifetime", headers=alice_headers)

        body = response.json()
        assert body["years"] == ["2023", "2024"]
        assert body["data"][0] == {"month": "Jan", "2023": 0, "2024": 2}
        assert body["data"][11] == {"month": "Dec", "2023": 1, "2024": 0}

    async def test_filter_options(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.get(
            "/stats/filters", params={"commanderQuery": "ed"}, headers=alice_headers
        )

        body = response.json()
        assert body["years"] == ["2024", "2023"]
        assert body["opponentNames"] == ["Bob", "Carol"]
        assert body["commanderSuggestions"] == ["Edgar"]


class TestEmptyStats:
    async def test_no_games(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.get("/stats", headers=alice_headers)

        body = response.json()
        assert body["gameCount"] == 0
        assert body["overview"]["winRate"] == 0
        assert body["overview"]["currentStreak"] == "—"
        assert body["monthly"] == []
        assert (await client.get("/stats/lifetime", headers=alice_headers)).json() == {
            "data": [],
            "years": [],
        }


class TestStoredRecordsWithNulls:
    async def test_stats_load_games_with_null_fields(
        self, client: AsyncClient, session: AsyncSession, alice_headers: dict[str, str]
    ) -> None:
        """Games synced from another client with null fields still aggregate."""
        await set_user_document(
            session,
            "uid-alice",
            {
                "games": [
                    {
                        "id": 1,
                        "date": None,
                        "myDeck": {"id": 1, "name": "Goblins", "commander": None},
                        "won": False,
                        "winnerColorIdentity": None,
                        "opponents": [{"name": "Bob", "commander": "Atraxa"}],
                        "totalPlayers": None,
                    }
                ]
            },
        )
        await session.commit()

        response = await client.get("/stats", headers=alice_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["gameCount"] == 1
        assert body["overview"]["currentStreak"] == "1L"
        assert body["monthly"] == []
        assert body["colors"][0]["color"] == "C"
