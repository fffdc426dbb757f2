"""Tests for deck, game, buddy and export API endpoints."""

import pytest
from httpx import AsyncClient

KRENKO = {"name": "Krenko, Mob Boss", "colorIdentity": ["R"], "type": "Legendary Creature"}


@pytest.fixture
async def deck_id(client: AsyncClient, alice_headers: dict[str, str]) -> int:
    response = await client.post(
        "/decks", json={"name": "Goblins", "commander": KRENKO}, headers=alice_headers
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestDeckEndpoints:
    async def test_create_and_list(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        response = await client.get("/decks", headers=alice_headers)

        assert response.status_code == 200
        [deck] = response.json()
        assert deck["id"] == deck_id
        assert deck["commander"]["colorIdentity"] == ["R"]
        assert "dateAdded" in deck

    async def test_blank_name_rejected(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/decks", json={"name": "   ", "commander": KRENKO}, headers=alice_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Deck name cannot be empty"

    async def test_archive_and_filter(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        archived = await client.post(f"/decks/{deck_id}/archive", headers=alice_headers)
        active = await client.get("/decks?include_archived=false", headers=alice_headers)

        assert archived.json()["archived"] is True
        assert active.json() == []

    async def test_reorder(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        second = await client.post(
            "/decks", json={"name": "Ninjas", "commander": KRENKO}, headers=alice_headers
        )

        response = await client.put(
            "/decks/order", json={"deckIds": [second.json()["id"], deck_id]}, headers=alice_headers
        )

        assert [d["name"] for d in response.json()] == ["Ninjas", "Goblins"]
        assert [d["sortOrder"] for d in response.json()] == [0, 1]

    async def test_import_decklist(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        response = await client.put(
            f"/decks/{deck_id}/decklist",
            json={"text": "1 Sol Ring\n2x Mountain\nnot a card"},
            headers=alice_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["deck"]["decklist"]["mainboard"] == {"Sol Ring": 1, "Mountain": 2}
        assert body["invalidLines"] == ["not a card"]
        assert body["totalCards"] == 3
        assert body["totalLooksOff"] is True

    async def test_import_empty_decklist(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        response = await client.put(
            f"/decks/{deck_id}/decklist", json={"text": "nothing here"}, headers=alice_headers
        )

        assert response.status_code == 400

    async def test_delete_unknown_deck(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        response = await client.delete("/decks/99", headers=alice_headers)

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"


class TestGameEndpoints:
    async def test_log_game(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        response = await client.post(
            "/games",
            json={
                "date": "2024-03-01",
                "deckId": deck_id,
                "won": False,
                "opponents": [
                    {"name": "Bob", "commander": "Yuriko", "colorIdentity": ["U", "B"]},
                    {"name": "Atraxa, Praetors' Voice"},
                ],
                "winningCommander": "Yuriko",
            },
            headers=alice_headers,
        )

        assert response.status_code == 201
        game = response.json()
        assert game["myDeck"]["name"] == "Goblins"
        assert game["winnerColorIdentity"] == "UB"
        assert game["totalPlayers"] == 3
        assert game["opponents"][1] == {
            "name": "Atraxa, Praetors' Voice",
            "commander": None,
            "colorIdentity": [],
        }

    async def test_unknown_deck(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.post(
            "/games", json={"date": "2024-03-01", "deckId": 42, "won": True}, headers=alice_headers
        )

        assert response.status_code == 404

    async def test_bad_date(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.post(
            "/games", json={"date": "March 1", "deckId": 1, "won": True}, headers=alice_headers
        )

        assert response.status_code == 422

    async def test_edit_keeps_snapshot_of_deleted_deck(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        created = await client.post(
            "/games",
            json={"date": "2024-03-01", "deckId": deck_id, "won": True},
            headers=alice_headers,
        )
        await client.delete(f"/decks/{deck_id}", headers=alice_headers)

        response = await client.put(
            f"/games/{created.json()['id']}",
            json={"date": "2024-03-02", "deckId": deck_id, "won": False},
            headers=alice_headers,
        )

        assert response.status_code == 200
        assert response.json()["myDeck"]["name"] == "Goblins"
        assert response.json()["won"] is False
        assert response.json()["winnerColorIdentity"] == "C"

    async def test_edit_pod_size(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        created = await client.post(
            "/games",
            json={"date": "2024-03-01", "deckId": deck_id, "won": True, "totalPlayers": 4},
            headers=alice_headers,
        )
        game_url = f"/games/{created.json()['id']}"
        body = {
            "date": "2024-03-01",
            "deckId": deck_id,
            "won": True,
            "opponents": [{"name": "Bob", "commander": "Yuriko"}],
        }

        explicit = await client.put(
            game_url, json={**body, "totalPlayers": 5}, headers=alice_headers
        )
        derived = await client.put(game_url, json=body, headers=alice_headers)

        assert created.json()["totalPlayers"] == 4
        assert explicit.json()["totalPlayers"] == 5
        assert derived.json()["totalPlayers"] == 2

    async def test_delete_game(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        created = await client.post(
            "/games",
            json={"date": "2024-03-01", "deckId": deck_id, "won": True},
            headers=alice_headers,
        )

        deleted = await client.delete(f"/games/{created.json()['id']}", headers=alice_headers)
        remaining = await client.get("/games", headers=alice_headers)

        assert deleted.status_code == 204
        assert remaining.json() == []


class TestBuddyEndpoints:
    async def test_add_and_remove(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        await client.post("/buddies", json={"name": "Bob"}, headers=alice_headers)
        added = await client.post("/buddies", json={"name": "bob"}, headers=alice_headers)
        removed = await client.delete("/buddies/Bob", headers=alice_headers)

        assert added.json() == {"podBuddies": ["Bob"]}
        assert removed.json() == {"podBuddies": []}


class TestExportEndpoints:
    async def test_games_csv(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        await client.post(
            "/games",
            json={"date": "2024-03-01", "deckId": deck_id, "won": True},
            headers=alice_headers,
        )

        response = await client.get("/export/games", headers=alice_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "mtg-tracker-games-" in response.headers["content-disposition"]
        assert response.text.splitlines()[1] == "2024-03-01,Goblins,\"Krenko, Mob Boss\",true,,1"

    async def test_all_json(
        self, client: AsyncClient, alice_headers: dict[str, str], deck_id: int
    ) -> None:
        await client.post("/buddies", json={"name": "Bob"}, headers=alice_headers)

        response = await client.get("/export/all", headers=alice_headers)

        body = response.json()
        assert [d["id"] for d in body["decks"]] == [deck_id]
        assert body["podBuddies"] == ["Bob"]
        assert body["games"] == []
