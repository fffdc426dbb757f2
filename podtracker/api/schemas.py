"""
Request and response models.

Field names serialize in camelCase to match the stored document shape.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from podtracker.models.records import Commander, Game, Opponent


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Records ---


class CommanderModel(CamelModel):
    name: str
    color_identity: list[str] = Field(default_factory=list)
    type: str = ""
    colors: list[str] | None = None

    def to_record(self) -> Commander:
        return Commander(
            name=self.name,
            color_identity=list(self.color_identity),
            type=self.type,
            colors=list(self.colors) if self.colors is not None else None,
        )


class DecklistModel(CamelModel):
    mainboard: dict[str, int] = Field(default_factory=dict)
    commander: dict[str, int] = Field(default_factory=dict)
    raw_text: str = ""


class DeckModel(CamelModel):
    id: int
    name: str
    commander: CommanderModel
    date_added: str
    archived: bool | None = None
    sort_order: int | None = None
    decklist: DecklistModel | None = None


class GameDeckModel(CamelModel):
    id: int
    name: str
    commander: CommanderModel


class OpponentModel(CamelModel):
    """An opponent seat. Omit commander only for legacy commander-as-name records."""

    name: str = ""
    commander: str | None = None
    color_identity: list[str] = Field(default_factory=list)

    def to_record(self) -> Opponent:
        return Opponent.from_dict(self.model_dump(by_alias=True, exclude_none=True))


class GameModel(CamelModel):
    id: int
    date: str
    my_deck: GameDeckModel
    won: bool
    winner_color_identity: str
    winning_commander: str | None = None
    opponents: list[OpponentModel] = Field(default_factory=list)
    total_players: int


def game_to_model(game: Game) -> GameModel:
    return GameModel.model_validate(game.to_dict())


# --- Requests ---


class DeckCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    commander: CommanderModel


class DeckOrderRequest(CamelModel):
    deck_ids: list[int]


class DecklistImportRequest(CamelModel):
    text: str = Field(
        ...,
        description="Pasted decklist, one 'quantity name' per line",
        examples=["1 Sol Ring\n1 Command Tower"],
    )


class DecklistImportResponse(CamelModel):
    deck: DeckModel
    invalid_lines: list[str] = Field(default_factory=list)
    total_cards: int = 0
    total_looks_off: bool = False


class GameRequest(CamelModel):
    """Body for logging or editing a game."""

    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    deck_id: int
    won: bool
    opponents: list[OpponentModel] = Field(default_factory=list)
    total_players: int | None = Field(default=None, ge=1)
    winning_commander: str | None = None
    winner_color_identity: str | None = None


class BuddyRequest(CamelModel):
    name: str


class UsernameRequest(CamelModel):
    username: str


class FriendRequestCreate(CamelModel):
    friend_id: str


# --- Responses ---


class ProfileResponse(CamelModel):
    friend_id: str
    username: str


class FriendRequestModel(CamelModel):
    from_friend_id: str
    from_username: str
    timestamp: str


class FriendModel(CamelModel):
    friend_id: str
    username: str


class BuddyListResponse(CamelModel):
    pod_buddies: list[str]


class OverviewStatsModel(CamelModel):
    total_games: int
    wins: int
    losses: int
    win_rate: int
    current_streak: str
    longest_win_streak: int
    longest_loss_streak: int
    most_played_deck: str | None
    avg_games_per_month: float


class DeckStatModel(CamelModel):
    deck_name: str
    wins: int
    losses: int
    total: int
    win_rate: int


class MonthlyStatModel(CamelModel):
    month: str
    wins: int
    losses: int


class ColorStatModel(CamelModel):
    color: str
    count: int
    name: str = ""
    label: str = ""
    fill: str = ""


class GradientStopModel(CamelModel):
    offset: str
    color: str


class ColorGradientModel(CamelModel):
    """Linear gradient for a multicolor chart bar, referenced by ColorStatModel.fill."""

    id: str
    stops: list[GradientStopModel]


class FacedCommanderStatModel(CamelModel):
    commander_name: str
    color_identity: list[str]
    times_faced: int
    wins_against: int
    win_rate: int


class BuddyStatModel(CamelModel):
    buddy_name: str
    wins: int
    losses: int
    total: int
    win_rate: int


class StatsResponse(CamelModel):
    """Every aggregate for one filtered view."""

    filter_label: str | None = None
    game_count: int
    overview: OverviewStatsModel
    decks: list[DeckStatModel]
    monthly: list[MonthlyStatModel]
    colors: list[ColorStatModel]
    color_gradients: list[ColorGradientModel] = Field(default_factory=list)
    most_faced_commanders: list[FacedCommanderStatModel]
    buddies: list[BuddyStatModel]


class LifetimeGPResponse(CamelModel):
    data: list[dict[str, Any]]
    years: list[str]


class StatsFiltersResponse(CamelModel):
    years: list[str]
    opponent_names: list[str]
    commander_suggestions: list[str]


class FriendStatsResponse(CamelModel):
    friend_id: str
    username: str
    decks: list[DeckModel]
    stats: StatsResponse


class CommanderSearchResponse(CamelModel):
    query: str
    names: list[str]


class CardImageResponse(CamelModel):
    name: str
    url: str | None

