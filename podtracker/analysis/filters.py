"""
Statistics filters.

Narrows a game list by year, opponent player, or opposing commander before
the aggregations in stats run, and lists the values each filter offers.
"""

from dataclasses import dataclass

from podtracker.config import settings
from podtracker.models.records import Game


@dataclass(frozen=True, slots=True)
class GameFilter:
    """
    Active statistics filters. None means "all".

    Attributes:
        year: Four-digit year prefix of the game date
        buddy: Opponent name as stored on the seat
        commander: Opposing commander name, matched case-insensitively
    """

    year: str | None = None
    buddy: str | None = None
    commander: str | None = None

    @property
    def is_active(self) -> bool:
        return bool(self.year or self.buddy or self.commander)

    def label(self) -> str | None:
        """Heading for the filtered view, e.g. "2024 · vs. Alice Stats"."""
        parts: list[str] = []
        if self.year:
            parts.append(self.year)
        if self.buddy:
            parts.append(f"vs. {self.buddy}")
        if self.commander:
            parts.append(f"vs. {self.commander}")
        return " · ".join(parts) + " Stats" if parts else None


def _faced_commander(game: Game, commander: str) -> bool:
    target = commander.lower()
    if any(o.commander.lower() == target for o in game.opponents):
        return True
    return bool(game.winning_commander) and game.winning_commander.lower() == target


def filter_games(games: list[Game], game_filter: GameFilter) -> list[Game]:
    """Return the games matching every active filter, in input order."""
    result = games
    if game_filter.year:
        result = [g for g in result if g.date.startswith(game_filter.year)]
    if game_filter.buddy:
        result = [
            g for g in result if any(o.stored_name == game_filter.buddy for o in g.opponents)
        ]
    if game_filter.commander:
        result = [g for g in result if _faced_commander(g, game_filter.commander)]
    return list(result)


def available_years(games: list[Game]) -> list[str]:
    """Years with at least one game, newest first."""
    return sorted({g.date[:4] for g in games if g.date}, reverse=True)


def opponent_names(games: list[Game]) -> list[str]:
    """Distinct opponent names as stored, sorted case-insensitively."""
    names = {o.stored_name.strip() for g in games for o in g.opponents}
    names.discard("")
    return sorted(names, key=str.casefold)


def commander_names(games: list[Game]) -> list[str]:
    """Distinct opposing and winning commander names, sorted case-insensitively."""
    names: set[str] = set()
    for game in games:
        names.update(o.commander.strip() for o in game.opponents)
        if game.winning_commander:
            names.add(game.winning_commander.strip())
    names.discard("")
    return sorted(names, key=str.casefold)


def commander_suggestions(games: list[Game], query: str, limit: int | None = None) -> list[str]:
    """
    Commander names containing query (case-insensitive), up to limit.

    limit defaults to the configured commander suggestion limit.
    """
    if limit is None:
        limit = settings.commander_suggestion_limit
    names = commander_names(games)
    needle = query.strip().lower()
    if not needle:
        return names[:limit]
    return [n for n in names if needle in n.lower()][:limit]
