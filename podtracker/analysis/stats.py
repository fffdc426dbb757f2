"""
Game statistics.

Pure aggregations over a snapshot of recorded games. Nothing here mutates
its input or keeps state between calls; empty input yields zeroed or
empty results.

Percentages round half up, so 2/3 -> 67 and 1/8 -> 13.
"""

import math
from dataclasses import dataclass, field

from podtracker.config import MONTHLY_STATS_WINDOW
from podtracker.models.color import normalize_color_identity
from podtracker.models.records import Deck, Game

MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

NO_STREAK = "—"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def win_rate(wins: int, total: int) -> int:
    """Integer win percentage, 0 when there are no games."""
    if total <= 0:
        return 0
    return round_half_up(wins / total * 100)


def _month_index(date: str) -> int | None:
    """Zero-based month from a "YYYY-MM-DD" string, None if unparseable."""
    try:
        month = int(date[5:7])
    except ValueError:
        return None
    return month - 1 if 1 <= month <= 12 else None


def _chronological_key(game: Game) -> tuple[str, int]:
    # Same-day games fall back to id, so later-created games sort later
    return (game.date, game.id)


# --- Overview ---


@dataclass(frozen=True, slots=True)
class OverviewStats:
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: int = 0
    current_streak: str = NO_STREAK
    longest_win_streak: int = 0
    longest_loss_streak: int = 0
    most_played_deck: str | None = None
    avg_games_per_month: float = 0.0


def compute_overview_stats(games: list[Game], decks: list[Deck] | None = None) -> OverviewStats:
    """
    Compute headline counters for a set of games.

    Args:
        games: Games to summarize
        decks: The user's decks (accepted for call-site symmetry; unused)

    Returns:
        OverviewStats; all zero with current_streak "—" when games is empty
    """
    if not games:
        return OverviewStats()

    total_games = len(games)
    wins = sum(1 for g in games if g.won)
    losses = total_games - wins

    # Current streak: most recent result and how many in a row match it
    newest_first = sorted(games, key=_chronological_key, reverse=True)
    streak_won = newest_first[0].won
    streak_count = 0
    for game in newest_first:
        if game.won != streak_won:
            break
        streak_count += 1
    current_streak = f"{streak_count}{'W' if streak_won else 'L'}"

    # Longest streaks in one chronological pass
    longest_win = longest_loss = 0
    cur_win = cur_loss = 0
    for game in sorted(games, key=_chronological_key):
        if game.won:
            cur_win += 1
            cur_loss = 0
            longest_win = max(longest_win, cur_win)
        else:
            cur_loss += 1
            cur_win = 0
            longest_loss = max(longest_loss, cur_loss)

    # Most played deck; first seen wins ties
    deck_counts: dict[str, int] = {}
    for game in games:
        name = game.my_deck.name
        deck_counts[name] = deck_counts.get(name, 0) + 1
    most_played: str | None = None
    max_count = 0
    for name, count in deck_counts.items():
        if count > max_count:
            max_count = count
            most_played = name

    months = {g.month_key for g in games if _month_index(g.date) is not None}
    avg_per_month = round_half_up(total_games / len(months) * 10) / 10 if months else 0.0

    return OverviewStats(
        total_games=total_games,
        wins=wins,
        losses=losses,
        win_rate=win_rate(wins, total_games),
        current_streak=current_streak,
        longest_win_streak=longest_win,
        longest_loss_streak=longest_loss,
        most_played_deck=most_played,
        avg_games_per_month=avg_per_month,
    )


# --- Per Deck ---


@dataclass(frozen=True, slots=True)
class DeckStat:
    deck_name: str
    wins: int
    losses: int
    total: int
    win_rate: int


def compute_deck_stats(games: list[Game]) -> list[DeckStat]:
    """
    Win/loss per deck name, most played first.

    Only decks that appear in games are included; see merge_unplayed_decks.
    """
    tallies: dict[str, list[int]] = {}
    for game in games:
        entry = tallies.setdefault(game.my_deck.name, [0, 0])
        entry[0 if game.won else 1] += 1

    stats = [
        DeckStat(
            deck_name=name,
            wins=wins,
            losses=losses,
            total=wins + losses,
            win_rate=win_rate(wins, wins + losses),
        )
        for name, (wins, losses) in tallies.items()
    ]
    return sorted(stats, key=lambda s: s.total, reverse=True)


def merge_unplayed_decks(
    deck_stats: list[DeckStat],
    decks: list[Deck],
    include_archived: bool = False,
) -> list[DeckStat]:
    """
    Append zero-game entries for decks missing from deck_stats.

    Played decks keep their order; unplayed decks follow in library order.
    """
    seen = {s.deck_name for s in deck_stats}
    merged = list(deck_stats)
    for deck in decks:
        if deck.name in seen or (deck.is_archived and not include_archived):
            continue
        seen.add(deck.name)
        merged.append(DeckStat(deck_name=deck.name, wins=0, losses=0, total=0, win_rate=0))
    return merged


# --- Monthly ---


@dataclass(frozen=True, slots=True)
class MonthlyStat:
    month: str  # "Jan '24"
    wins: int
    losses: int


def format_month_label(month_key: str) -> str:
    """Format "2024-01" as "Jan '24"."""
    index = _month_index(month_key + "-01")
    name = MONTH_NAMES[index] if index is not None else month_key[5:7]
    return f"{name} '{month_key[2:4]}"


def compute_monthly_stats(games: list[Game]) -> list[MonthlyStat]:
    """Win/loss per calendar month, oldest first, last 12 months with games."""
    tallies: dict[str, list[int]] = {}
    for game in games:
        if _month_index(game.date) is None:
            continue
        entry = tallies.setdefault(game.month_key, [0, 0])
        entry[0 if game.won else 1] += 1

    recent = sorted(tallies.items())[-MONTHLY_STATS_WINDOW:]
    return [
        MonthlyStat(month=format_month_label(key), wins=wins, losses=losses)
        for key, (wins, losses) in recent
    ]


# --- Color Identity ---


@dataclass(frozen=True, slots=True)
class ColorStat:
    color: str  # Normalized WUBRG string, "C" for colorless
    count: int


def compute_color_stats(games: list[Game]) -> list[ColorStat]:
    """Count winning color identities, most frequent first."""
    counts: dict[str, int] = {}
    for game in games:
        color = normalize_color_identity(game.winner_color_identity)
        counts[color] = counts.get(color, 0) + 1

    stats = [ColorStat(color=color, count=count) for color, count in counts.items()]
    return sorted(stats, key=lambda s: s.count, reverse=True)


# --- Opponent Commanders ---


@dataclass(frozen=True, slots=True)
class FacedCommanderStat:
    commander_name: str
    color_identity: list[str]
    times_faced: int
    wins_against: int
    win_rate: int


@dataclass
class _FacedTally:
    color_identity: list[str] = field(default_factory=list)
    faced: int = 0
    wins: int = 0


def compute_most_faced_commanders(games: list[Game]) -> list[FacedCommanderStat]:
    """
    How often each opposing commander was faced and beaten.

    A commander counts once per game even if several seats played it. When
    the user lost to a winning commander missing from the opponent list,
    that commander is counted too. The longest color identity recorded for
    a commander is kept.
    """
    tallies: dict[str, _FacedTally] = {}

    def track(name: str, color_identity: list[str], won: bool) -> None:
        tally = tallies.setdefault(name, _FacedTally())
        tally.faced += 1
        if won:
            tally.wins += 1
        if len(color_identity) > len(tally.color_identity):
            tally.color_identity = list(color_identity)

    for game in games:
        seen: set[str] = set()
        for opponent in game.opponents:
            name = opponent.commander.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            track(name, opponent.color_identity, game.won)

        if not game.won and game.winning_commander:
            winner = game.winning_commander.strip()
            if winner and winner not in seen:
                track(winner, [], game.won)

    stats = [
        FacedCommanderStat(
            commander_name=name,
            color_identity=tally.color_identity,
            times_faced=tally.faced,
            wins_against=tally.wins,
            win_rate=win_rate(tally.wins, tally.faced),
        )
        for name, tally in tallies.items()
    ]
    return sorted(stats, key=lambda s: s.times_faced, reverse=True)


# --- Pod Buddies ---


@dataclass(frozen=True, slots=True)
class BuddyStat:
    buddy_name: str
    wins: int
    losses: int
    total: int
    win_rate: int


def compute_buddy_stats(games: list[Game]) -> list[BuddyStat]:
    """
    Win/loss against each named opponent player, most games first.

    Legacy opponent records name a commander rather than a player, so they
    are left out. A player listed twice in one game counts once.
    """
    tallies: dict[str, list[int]] = {}
    for game in games:
        seen: set[str] = set()
        for opponent in game.opponents:
            if not opponent.has_player:
                continue
            player = opponent.player.strip() if opponent.player else ""
            if not player or player in seen:
                continue
            seen.add(player)
            entry = tallies.setdefault(player, [0, 0])
            entry[0 if game.won else 1] += 1

    stats = [
        BuddyStat(
            buddy_name=name,
            wins=wins,
            losses=losses,
            total=wins + losses,
            win_rate=win_rate(wins, wins + losses),
        )
        for name, (wins, losses) in tallies.items()
    ]
    return sorted(stats, key=lambda s: s.total, reverse=True)


# --- Year Over Year ---


@dataclass(frozen=True, slots=True)
class LifetimeGPPoint:
    month: str  # "Jan".."Dec"
    counts: dict[str, int]  # year -> games played that month


@dataclass(frozen=True, slots=True)
class LifetimeGP:
    data: list[LifetimeGPPoint] = field(default_factory=list)
    years: list[str] = field(default_factory=list)


def compute_lifetime_gp(games: list[Game]) -> LifetimeGP:
    """
    Games played per calendar month, one series per year.

    Returns twelve rows (Jan-Dec), each holding a count for every year
    present in the data. Empty input returns no rows and no years.
    """
    counts: dict[str, dict[int, int]] = {}
    for game in games:
        month = _month_index(game.date)
        if month is None:
            continue
        by_month = counts.setdefault(game.date[:4], {})
        by_month[month] = by_month.get(month, 0) + 1

    if not counts:
        return LifetimeGP()

    years = sorted(counts)
    data = [
        LifetimeGPPoint(
            month=month_name,
            counts={year: counts[year].get(index, 0) for year in years},
        )
        for index, month_name in enumerate(MONTH_NAMES)
    ]
    return LifetimeGP(data=data, years=years)
