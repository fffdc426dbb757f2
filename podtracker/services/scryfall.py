"""
Card data lookups against the Scryfall API.

Resolves commander names to color identity and type, suggests commander
names for partial queries, and finds art-crop image URLs. Network and HTTP
failures degrade to None or an empty list; nothing raises past this module.

API docs: https://scryfall.com/docs/api
"""

import logging
from typing import Any

import httpx

from podtracker.config import MIN_COMMANDER_QUERY_LENGTH, settings
from podtracker.models.records import Commander
from podtracker.services.cache import SessionCache

logger = logging.getLogger(__name__)

USER_AGENT = "PodTracker/1.0"


def parse_commander(card: dict[str, Any]) -> Commander:
    """Build a Commander from a Scryfall card object."""
    return Commander(
        name=card["name"],
        color_identity=list(card.get("color_identity", [])),
        type=card.get("type_line", ""),
        colors=card.get("colors"),
    )


def extract_art_crop(card: dict[str, Any]) -> str | None:
    """Art-crop URL, taking the front face of double-faced cards."""
    image_uris = card.get("image_uris")
    if image_uris and image_uris.get("art_crop"):
        return str(image_uris["art_crop"])

    faces = card.get("card_faces") or []
    if faces:
        face_uris = faces[0].get("image_uris") or {}
        if face_uris.get("art_crop"):
            return str(face_uris["art_crop"])
    return None


class ScryfallClient:
    """
    Cached Scryfall lookups.

    Commanders are cached by exact name once found. Image URLs are cached
    for hits and misses alike, so a name is never fetched twice per session.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        commander_cache: SessionCache[Commander] | None = None,
        image_cache: SessionCache[str | None] | None = None,
        base_url: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self._http = http_client or httpx.AsyncClient(
            timeout=settings.scryfall_timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        self.commander_cache: SessionCache[Commander] = (
            commander_cache if commander_cache is not None else SessionCache()
        )
        self.image_cache: SessionCache[str | None] = (
            image_cache if image_cache is not None else SessionCache()
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_json(self, path: str, params: dict[str, str]) -> dict[str, Any] | None:
        try:
            response = await self._http.get(f"{self.base_url}{path}", params=params)
            response.raise_for_status()
            data: dict[str, Any] = response.json()
            return data
        except httpx.HTTPStatusError as e:
            logger.warning("Scryfall %s returned HTTP %d", path, e.response.status_code)
        except (httpx.RequestError, ValueError) as e:
            logger.warning("Scryfall %s request failed: %s", path, e)
        return None

    async def fetch_commander_by_name(self, name: str) -> Commander | None:
        """Full card data for an exact commander name, or None."""
        cached = self.commander_cache.get(name)
        if cached is not None:
            logger.debug("Commander cache hit for %s", name)
            return cached

        card = await self._get_json("/cards/named", {"exact": name})
        if card is None or "name" not in card:
            return None

        commander = parse_commander(card)
        self.commander_cache.set(name, commander)
        return commander

    async def search_commander_names(self, query: str) -> list[str]:
        """Commander-legal card names matching query, up to the configured limit."""
        if len(query.strip()) < MIN_COMMANDER_QUERY_LENGTH:
            return []

        data = await self._get_json(
            "/cards/search",
            {"q": f"{query.strip()} is:commander", "order": "name", "unique": "cards"},
        )
        if data is None:
            return []

        names = [card["name"] for card in data.get("data", []) if "name" in card]
        return names[: settings.commander_suggestion_limit]

    async def fetch_card_image_url(self, name: str) -> str | None:
        """Art-crop image URL for a card name (fuzzy match), or None."""
        if name in self.image_cache:
            logger.debug("Image cache hit for %s", name)
            return self.image_cache.get(name)

        card = await self._get_json("/cards/named", {"fuzzy": name})
        url = extract_art_crop(card) if card else None
        self.image_cache.set(name, url)
        return url
