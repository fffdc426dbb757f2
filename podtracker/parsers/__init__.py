from podtracker.parsers.decklist import (
    cards_to_decklist,
    extract_moxfield_cards,
    parse_decklist_text,
    parse_moxfield_deck_id,
)
from podtracker.parsers.export import (
    all_data_to_json,
    decks_to_json,
    export_filename,
    games_to_csv,
    games_to_json,
)

__all__ = [
    "all_data_to_json",
    "cards_to_decklist",
    "decks_to_json",
    "export_filename",
    "extract_moxfield_cards",
    "games_to_csv",
    "games_to_json",
    "parse_decklist_text",
    "parse_moxfield_deck_id",
]
