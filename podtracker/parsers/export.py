"""
Data export formatting.

Renders games and decks as CSV or JSON in the stored document shape, so
exports can be re-imported or read by other tools.
"""

import csv
import json
from datetime import date
from io import StringIO
from typing import Literal

from podtracker.models.records import Deck, Game

GAMES_CSV_HEADERS = ["Date", "Deck Name", "Commander", "Won", "Opponents", "Total Players"]

ExportKind = Literal["games", "decks", "all"]


def games_to_csv(games: list[Game]) -> str:
    """
    Games as CSV, one row per game.

    Opponents are the stored names joined with ";". Fields containing
    commas, quotes or newlines are quoted.
    """
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(GAMES_CSV_HEADERS)
    for game in games:
        writer.writerow(
            [
                game.date,
                game.my_deck.name,
                game.my_deck.commander_name,
                "true" if game.won else "false",
                ";".join(o.stored_name for o in game.opponents),
                str(game.total_players),
            ]
        )
    return buffer.getvalue().rstrip("\n")


def games_to_json(games: list[Game]) -> str:
    return json.dumps([g.to_dict() for g in games], indent=2, ensure_ascii=False)


def decks_to_json(decks: list[Deck]) -> str:
    return json.dumps([d.to_dict() for d in decks], indent=2, ensure_ascii=False)


def all_data_to_json(games: list[Game], decks: list[Deck], pod_buddies: list[str]) -> str:
    payload = {
        "games": [g.to_dict() for g in games],
        "decks": [d.to_dict() for d in decks],
        "podBuddies": list(pod_buddies),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def export_filename(kind: ExportKind, extension: str, today: date | None = None) -> str:
    """Download name, e.g. "mtg-tracker-games-2024-05-01.csv"."""
    stamp = (today or date.today()).isoformat()
    return f"mtg-tracker-{kind}-{stamp}.{extension}"
