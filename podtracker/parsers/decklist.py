"""
Decklist import parsing.

Supports:
- Pasted text: "1 Sol Ring" or "1x Sol Ring", one card per line
- Moxfield deck URLs and their JSON payloads
"""

import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from podtracker.models.records import Decklist

# Pattern: "1 Sol Ring" or "1x Sol Ring" or "1X Sol Ring"
# Groups: (quantity, card_name)
CARD_LINE_PATTERN = re.compile(r"^(\d+)\s*x?\s+(.+)$", re.IGNORECASE)

SECTION_HEADERS = re.compile(
    r"^(commander|commanders|deck|mainboard|sideboard|maybeboard|companion|companions|sb|mb)\b",
    re.IGNORECASE,
)

# A Commander deck is 100 cards; outside this range the import looks wrong
TOTAL_WARN_MIN = 95
TOTAL_WARN_MAX = 105


@dataclass(frozen=True, slots=True)
class CardEntry:
    quantity: int
    card_name: str


@dataclass
class ParsedDecklist:
    """Cards read from a decklist plus any lines that could not be read."""

    cards: list[CardEntry] = field(default_factory=list)
    invalid_lines: list[str] = field(default_factory=list)

    def total_cards(self) -> int:
        return sum(card.quantity for card in self.cards)

    @property
    def total_looks_off(self) -> bool:
        total = self.total_cards()
        return bool(self.cards) and not TOTAL_WARN_MIN <= total <= TOTAL_WARN_MAX


def parse_decklist_text(text: str) -> ParsedDecklist:
    """
    Parse pasted decklist text.

    Blank lines, comments (# or //) and section headers are skipped.
    Lines that are not "quantity name" with a positive quantity are
    reported in invalid_lines.
    """
    parsed = ParsedDecklist()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "//")) or SECTION_HEADERS.match(line):
            continue

        match = CARD_LINE_PATTERN.match(line)
        if not match:
            parsed.invalid_lines.append(line)
            continue

        quantity = int(match.group(1))
        name = match.group(2).strip()
        if not name or quantity <= 0:
            parsed.invalid_lines.append(line)
            continue

        parsed.cards.append(CardEntry(quantity=quantity, card_name=name))

    return parsed


def build_raw_text(cards: list[CardEntry]) -> str:
    return "\n".join(f"{card.quantity} {card.card_name}" for card in cards)


def cards_to_decklist(cards: list[CardEntry], raw_text: str | None = None) -> Decklist:
    """Aggregate parsed entries into a Decklist mainboard."""
    mainboard: dict[str, int] = {}
    for card in cards:
        mainboard[card.card_name] = mainboard.get(card.card_name, 0) + card.quantity
    return Decklist(
        mainboard=mainboard,
        commander={},
        raw_text=raw_text if raw_text is not None else build_raw_text(cards),
    )


# --- Moxfield ---


def parse_moxfield_deck_id(url: str) -> str | None:
    """
    Extract the deck id from a Moxfield deck URL.

    Accepts URLs with or without a scheme. Returns None for anything that
    is not moxfield.com/decks/<id>.
    """
    url = url.strip()
    if not url:
        return None

    parsed = urlparse(url if url.startswith("http") else f"https://{url}")
    if not parsed.hostname or "moxfield.com" not in parsed.hostname:
        return None

    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) < 2 or segments[0] != "decks":
        return None
    return segments[1]


def _read_moxfield_section(payload: dict[str, Any], key: str) -> Any:
    section = payload.get(key)
    if isinstance(section, dict) and isinstance(section.get("cards"), dict):
        return section["cards"]
    return section


def _moxfield_entry(entry: Any) -> CardEntry | None:
    if not isinstance(entry, dict):
        return None

    quantity_value = entry.get("quantity", entry.get("count", entry.get("qty")))
    card = entry.get("card") if isinstance(entry.get("card"), dict) else {}
    name = card.get("name") or entry.get("name") or entry.get("cardName")

    try:
        quantity = int(quantity_value)
    except (TypeError, ValueError):
        return None
    if not name or quantity <= 0:
        return None
    return CardEntry(quantity=quantity, card_name=str(name))


def extract_moxfield_cards(data: Any) -> list[CardEntry]:
    """Commander and mainboard entries from a Moxfield deck payload."""
    if not isinstance(data, dict):
        return []

    payload = data.get("boards") if isinstance(data.get("boards"), dict) else data
    cards: list[CardEntry] = []
    for key in ("commanders", "mainboard"):
        section = _read_moxfield_section(payload, key)
        if isinstance(section, list):
            entries = section
        elif isinstance(section, dict):
            entries = list(section.values())
        else:
            continue
        for entry in entries:
            card = _moxfield_entry(entry)
            if card:
                cards.append(card)
    return cards
