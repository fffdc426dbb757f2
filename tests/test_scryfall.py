"""Tests for Scryfall card lookups."""

import httpx
import pytest
import respx

from podtracker.models.records import Commander
from podtracker.services.cache import SessionCache
from podtracker.services.scryfall import ScryfallClient, extract_art_crop, parse_commander

BASE = "https://api.scryfall.com"

ATRAXA_CARD = {
    "object": "card",
    "name": "Atraxa, Praetors' Voice",
    "type_line": "Legendary Creature — Phyrexian Angel Horror",
    "color_identity": ["W", "U", "B", "G"],
    "colors": ["W", "U", "B", "G"],
    "image_uris": {"art_crop": "https://cards.scryfall.io/art_crop/atraxa.jpg"},
}

DFC_CARD = {
    "object": "card",
    "name": "Esika, God of the Tree // The Prismatic Bridge",
    "card_faces": [
        {"image_uris": {"art_crop": "https://cards.scryfall.io/art_crop/esika-front.jpg"}},
        {"image_uris": {"art_crop": "https://cards.scryfall.io/art_crop/esika-back.jpg"}},
    ],
}


@pytest.fixture
async def scryfall():
    async with httpx.AsyncClient() as http:
        yield ScryfallClient(http_client=http, base_url=BASE)


class TestParsing:
    def test_parse_commander(self) -> None:
        commander = parse_commander(ATRAXA_CARD)

        assert commander == Commander(
            name="Atraxa, Praetors' Voice",
            color_identity=["W", "U", "B", "G"],
            type="Legendary Creature — Phyrexian Angel Horror",
            colors=["W", "U", "B", "G"],
        )

    def test_art_crop_front_face(self) -> None:
        assert extract_art_crop(DFC_CARD) == "https://cards.scryfall.io/art_crop/esika-front.jpg"

    def test_art_crop_missing(self) -> None:
        assert extract_art_crop({"name": "Token"}) is None


class TestFetchCommander:
    @respx.mock
    async def test_fetch_and_cache(self, scryfall: ScryfallClient) -> None:
        """A found commander is cached, so the second lookup makes no request."""
        route = respx.get(f"{BASE}/cards/named").mock(
            return_value=httpx.Response(200, json=ATRAXA_CARD)
        )

        first = await scryfall.fetch_commander_by_name("Atraxa, Praetors' Voice")
        second = await scryfall.fetch_commander_by_name("atraxa, praetors' voice")

        assert first is not None
        assert first.color_identity == ["W", "U", "B", "G"]
        assert second == first
        assert route.call_count == 1
        assert route.calls[0].request.url.params["exact"] == "Atraxa, Praetors' Voice"

    @respx.mock
    async def test_not_found_degrades_to_none(self, scryfall: ScryfallClient) -> None:
        respx.get(f"{BASE}/cards/named").mock(return_value=httpx.Response(404, json={}))

        assert await scryfall.fetch_commander_by_name("Nonexistent Card") is None

    @respx.mock
    async def test_network_error_degrades_to_none(self, scryfall: ScryfallClient) -> None:
        respx.get(f"{BASE}/cards/named").mock(side_effect=httpx.ConnectError("boom"))

        assert await scryfall.fetch_commander_by_name("Atraxa") is None

    async def test_uses_injected_cache(self) -> None:
        """A pre-filled cache answers without touching the network."""
        cache: SessionCache[Commander] = SessionCache()
        cache.set("Krenko, Mob Boss", Commander(name="Krenko, Mob Boss", color_identity=["R"]))
        async with httpx.AsyncClient() as http:
            client = ScryfallClient(http_client=http, commander_cache=cache, base_url=BASE)

            commander = await client.fetch_commander_by_name("Krenko, Mob Boss")

        assert commander is not None
        assert commander.color_identity == ["R"]


class TestSearchCommanderNames:
    @respx.mock(assert_all_called=False)
    async def test_short_query_makes_no_request(self, scryfall: ScryfallClient) -> None:
        route = respx.get(f"{BASE}/cards/search")

        assert await scryfall.search_commander_names("a") == []
        assert not route.called

    @respx.mock
    async def test_limits_results(self, scryfall: ScryfallClient) -> None:
        names = [f"Commander {i}" for i in range(20)]
        route = respx.get(f"{BASE}/cards/search").mock(
            return_value=httpx.Response(200, json={"data": [{"name": n} for n in names]})
        )

        result = await scryfall.search_commander_names("comm")

        assert result == names[:8]
        assert route.calls[0].request.url.params["q"] == "comm is:commander"

    @respx.mock
    async def test_error_degrades_to_empty(self, scryfall: ScryfallClient) -> None:
        respx.get(f"{BASE}/cards/search").mock(return_value=httpx.Response(500))

        assert await scryfall.search_commander_names("atraxa") == []


class TestFetchCardImageUrl:
    @respx.mock
    async def test_front_face_of_double_faced_card(self, scryfall: ScryfallClient) -> None:
        respx.get(f"{BASE}/cards/named").mock(return_value=httpx.Response(200, json=DFC_CARD))

        url = await scryfall.fetch_card_image_url("Esika")

        assert url == "https://cards.scryfall.io/art_crop/esika-front.jpg"

    @respx.mock
    async def test_misses_are_cached(self, scryfall: ScryfallClient) -> None:
        route = respx.get(f"{BASE}/cards/named").mock(return_value=httpx.Response(404))

        assert await scryfall.fetch_card_image_url("Not A Card") is None
        assert await scryfall.fetch_card_image_url("Not A Card") is None
        assert route.call_count == 1
