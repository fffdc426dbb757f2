"""
Deck and game records.

Records are stored as camelCase JSON documents inside the user profile.
Each dataclass converts to and from that stored shape with from_dict/to_dict.
"""

from dataclasses import dataclass, field
from typing import Any

from podtracker.models.color import COLORLESS, color_identity_to_string


def _text(value: Any) -> str:
    """A stored string field, or "" when it is null or not a string."""
    return value if isinstance(value, str) else ""


def _int(value: Any, default: int = 0) -> int:
    """A stored integer field, or default when it is null or not a number."""
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return default
    try:
        return int(value)
    except (ValueError, OverflowError):
        return default


def _letters(value: Any) -> list[str]:
    """A stored color identity list, keeping only string entries."""
    if not isinstance(value, list | tuple):
        return []
    return [c for c in value if isinstance(c, str)]


@dataclass(frozen=True, slots=True)
class Commander:
    """
    A commander card as returned by the card-data lookup.

    Attributes:
        name: Exact card name
        color_identity: Subset of W/U/B/R/G, in the order the lookup returned it
        type: Type line (e.g., "Legendary Creature — Elf Druid")
        colors: Printed colors, when the lookup supplied them
    """

    name: str
    color_identity: list[str] = field(default_factory=list)
    type: str = ""
    colors: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Commander":
        return cls(
            name=_text(data.get("name")),
            color_identity=_letters(data.get("colorIdentity")),
            type=_text(data.get("type")),
            colors=data.get("colors"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "colorIdentity": list(self.color_identity),
            "type": self.type,
        }
        if self.colors is not None:
            result["colors"] = list(self.colors)
        return result


@dataclass(frozen=True, slots=True)
class Decklist:
    """Imported card list for a deck."""

    mainboard: dict[str, int] = field(default_factory=dict)
    commander: dict[str, int] = field(default_factory=dict)
    raw_text: str = ""

    def total_cards(self) -> int:
        return sum(self.mainboard.values()) + sum(self.commander.values())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Decklist":
        return cls(
            mainboard=dict(data.get("mainboard") or {}),
            commander=dict(data.get("commander") or {}),
            raw_text=data.get("rawText", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mainboard": dict(self.mainboard),
            "commander": dict(self.commander),
            "rawText": self.raw_text,
        }


@dataclass(frozen=True, slots=True)
class Deck:
    """
    A deck in the user's library.

    archived hides the deck from active play without losing history.
    sort_order is a dense 0-based rank set only by manual reordering.
    """

    id: int
    name: str
    commander: Commander
    date_added: str
    archived: bool | None = None
    sort_order: int | None = None
    decklist: Decklist | None = None

    @property
    def is_archived(self) -> bool:
        return bool(self.archived)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deck":
        decklist = data.get("decklist")
        commander = data.get("commander")
        return cls(
            id=_int(data.get("id")),
            name=_text(data.get("name")),
            commander=Commander.from_dict(commander if isinstance(commander, dict) else {}),
            date_added=_text(data.get("dateAdded")),
            archived=data.get("archived"),
            sort_order=data.get("sortOrder"),
            decklist=Decklist.from_dict(decklist) if isinstance(decklist, dict) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "commander": self.commander.to_dict(),
            "dateAdded": self.date_added,
        }
        if self.archived is not None:
            result["archived"] = self.archived
        if self.sort_order is not None:
            result["sortOrder"] = self.sort_order
        if self.decklist is not None:
            result["decklist"] = self.decklist.to_dict()
        return result


@dataclass(frozen=True, slots=True)
class GameDeck:
    """
    Snapshot of the player's deck at the time a game was recorded.

    Editing the deck later does not change this snapshot.
    """

    id: int
    name: str
    commander_name: str
    commander_color_identity: list[str] = field(default_factory=list)

    @classmethod
    def from_deck(cls, deck: Deck) -> "GameDeck":
        return cls(
            id=deck.id,
            name=deck.name,
            commander_name=deck.commander.name,
            commander_color_identity=list(deck.commander.color_identity),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameDeck":
        commander = data.get("commander")
        if not isinstance(commander, dict):
            commander = {}
        return cls(
            id=_int(data.get("id")),
            name=_text(data.get("name")),
            commander_name=_text(commander.get("name")),
            commander_color_identity=_letters(commander.get("colorIdentity")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "commander": {
                "name": self.commander_name,
                "colorIdentity": list(self.commander_color_identity),
            },
        }


@dataclass(frozen=True, slots=True)
class Opponent:
    """
    An opponent seat in a recorded game.

    Two stored shapes exist. Current records hold the player in "name" and
    the commander in "commander". Legacy records hold only "name", which is
    the commander. Both are normalized here on load:

        commander: the commander name, for either shape
        player: the human player's name, None for legacy records or blanks
        legacy: True when loaded from the commander-only shape

    to_dict writes the record back in the shape it was loaded from.
    """

    commander: str
    player: str | None = None
    color_identity: list[str] = field(default_factory=list)
    legacy: bool = False

    @property
    def has_player(self) -> bool:
        """True when this seat names a real player with a known commander."""
        return not self.legacy and bool(self.player) and bool(self.commander)

    @property
    def stored_name(self) -> str:
        """The raw "name" field as stored: the commander for legacy records."""
        return self.commander if self.legacy else self.player or ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Opponent":
        name = _text(data.get("name")).strip()
        color_identity = _letters(data.get("colorIdentity"))
        commander = data.get("commander")

        if commander is None:
            return cls(commander=name, player=None, color_identity=color_identity, legacy=True)

        return cls(
            commander=_text(commander).strip(),
            player=name or None,
            color_identity=color_identity,
        )

    def to_dict(self) -> dict[str, Any]:
        if self.legacy:
            result: dict[str, Any] = {"name": self.commander}
        else:
            result = {"name": self.player or "", "commander": self.commander}
        if self.color_identity:
            result["colorIdentity"] = list(self.color_identity)
        return result


@dataclass(frozen=True, slots=True)
class Game:
    """
    A recorded game.

    Attributes:
        id: Unique within the user's games, assigned max+1
        date: "YYYY-MM-DD"
        my_deck: Snapshot of the deck the user played
        won: Whether the user won
        winner_color_identity: Joined color letters of the winner, "C" for colorless
        opponents: Opponent seats
        total_players: Pod size including the user
        winning_commander: The commander that won, set only when the user lost
    """

    id: int
    date: str
    my_deck: GameDeck
    won: bool
    winner_color_identity: str = COLORLESS
    opponents: list[Opponent] = field(default_factory=list)
    total_players: int = 0
    winning_commander: str | None = None

    @property
    def month_key(self) -> str:
        """The "YYYY-MM" bucket for this game."""
        return self.date[:7]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Game":
        opponents = [
            Opponent.from_dict(o) for o in data.get("opponents") or [] if isinstance(o, dict)
        ]
        my_deck = data.get("myDeck")
        return cls(
            id=_int(data.get("id")),
            date=_text(data.get("date")),
            my_deck=GameDeck.from_dict(my_deck if isinstance(my_deck, dict) else {}),
            won=bool(data.get("won")),
            winner_color_identity=_text(data.get("winnerColorIdentity")) or COLORLESS,
            opponents=opponents,
            total_players=_int(data.get("totalPlayers")) or len(opponents) + 1,
            winning_commander=_text(data.get("winningCommander")) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "myDeck": self.my_deck.to_dict(),
            "won": self.won,
            "winnerColorIdentity": self.winner_color_identity or COLORLESS,
            "opponents": [o.to_dict() for o in self.opponents],
            "totalPlayers": self.total_players,
        }
        if self.winning_commander:
            result["winningCommander"] = self.winning_commander
        return result


def derive_winner_color_identity(
    won: bool,
    my_deck: GameDeck,
    winning_commander: str | None,
    opponents: list[Opponent],
) -> str:
    """
    Derive the stored winner color identity for a game.

    Uses the user's commander when they won, otherwise the identity of the
    opponent seat playing the winning commander. Never returns "".
    """
    if won:
        return color_identity_to_string(my_deck.commander_color_identity)

    if winning_commander:
        target = winning_commander.strip()
        for opponent in opponents:
            if opponent.commander == target and opponent.color_identity:
                return color_identity_to_string(opponent.color_identity)

    return COLORLESS


def load_decks(raw: list[dict[str, Any]] | None) -> list[Deck]:
    """Load stored deck documents."""
    return [Deck.from_dict(d) for d in raw or []]


def load_games(raw: list[dict[str, Any]] | None) -> list[Game]:
    """Load stored game documents, normalizing legacy opponent records."""
    return [Game.from_dict(g) for g in raw or []]
