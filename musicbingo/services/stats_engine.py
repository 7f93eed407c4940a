"""
Live game statistics.

Recomputed from scratch on every artist toggle: a pure projection of the
game's cards, the called artists and the excluded card numbers. Nothing is
cached between calls.
"""

from collections.abc import Iterable, Sequence

from musicbingo.config import settings
from musicbingo.models.card import BingoCard, CardStat, StatsSnapshot


def card_stat(card: BingoCard, called: set[str] | frozenset[str]) -> CardStat:
    """Count a card's uncalled cells. Names match by exact string equality."""
    remaining = sum(1 for name in card.names() if name not in called)
    return CardStat(
        card_number=card.card_number,
        remaining=remaining,
        is_complete=remaining == 0,
    )


def compute_stats(
    cards: Sequence[BingoCard],
    called_artists: Iterable[str],
    excluded_card_numbers: Iterable[int],
) -> StatsSnapshot:
    """
    Rank cards by how close they are to winning.

    Excluded card numbers that match no card are ignored. Ties in
    `remaining` keep the input card order.

    Args:
        cards: All cards of the game
        called_artists: Artist names announced so far
        excluded_card_numbers: Cards to leave out of the ranking and winners

    Returns:
        Snapshot with per-card stats sorted ascending by remaining
    """
    called = frozenset(called_artists)
    excluded = frozenset(excluded_card_numbers)

    stats = [card_stat(card, called) for card in cards if card.card_number not in excluded]
    # sorted() is stable, which keeps original card order for ties
    stats = sorted(stats, key=lambda stat: stat.remaining)

    return StatsSnapshot(
        per_card_stats=stats,
        winners=[stat.card_number for stat in stats if stat.is_complete],
        total_cards=len(stats),
    )


def near_complete(snapshot: StatsSnapshot, threshold: int | None = None) -> list[CardStat]:
    """Cards that have not won yet but need at most `threshold` more calls."""
    limit = threshold if threshold is not None else settings.near_complete_threshold
    return [stat for stat in snapshot.per_card_stats if 0 < stat.remaining <= limit]
