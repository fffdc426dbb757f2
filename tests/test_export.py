"""Tests for data export formatting."""

import json
from datetime import date

from podtracker.models.records import Commander, Deck, GameDeck, Opponent
from podtracker.parsers.export import (
    GAMES_CSV_HEADERS,
    all_data_to_json,
    decks_to_json,
    export_filename,
    games_to_csv,
    games_to_json,
)


class TestGamesToCsv:
    def test_header_only_for_no_games(self) -> None:
        assert games_to_csv([]) == ",".join(GAMES_CSV_HEADERS)

    def test_rows(self, make_game) -> None:
        games = [
            make_game(
                1,
                "2024-01-01",
                True,
                opponents=[
                    Opponent(commander="Yuriko", player="Alice"),
                    Opponent.from_dict({"name": "Edgar"}),
                ],
            )
        ]

        lines = games_to_csv(games).split("\n")

        assert lines[1] == (
            "2024-01-01,Atraxa Superfriends,\"Atraxa, Praetors' Voice\",true,Alice;Edgar,3"
        )

    def test_quotes_embedded_quotes(self, make_game) -> None:
        deck = GameDeck(id=9, name='The "Best" Deck', commander_name="Krenko")

        row = games_to_csv([make_game(1, "2024-01-01", False, deck=deck)]).split("\n")[1]

        assert row == '2024-01-01,"The ""Best"" Deck",Krenko,false,,1'


class TestJsonExports:
    def test_games_use_stored_shape(self, make_game) -> None:
        data = json.loads(games_to_json([make_game(1, "2024-01-01", True)]))

        assert data[0]["myDeck"]["name"] == "Atraxa Superfriends"
        assert data[0]["winnerColorIdentity"] == "C"

    def test_decks(self) -> None:
        deck = Deck(
            id=1,
            name="Krenko",
            commander=Commander("Krenko, Mob Boss", ["R"]),
            date_added="2024-01-01",
        )

        data = json.loads(decks_to_json([deck]))

        assert data == [deck.to_dict()]

    def test_all_data(self, make_game) -> None:
        data = json.loads(all_data_to_json([make_game(1, "2024-01-01", True)], [], ["Alice"]))

        assert set(data) == {"games", "decks", "podBuddies"}
        assert data["podBuddies"] == ["Alice"]


def test_export_filename() -> None:
    name = export_filename("games", "csv", today=date(2024, 5, 1))

    assert name == "mtg-tracker-games-2024-05-01.csv"
