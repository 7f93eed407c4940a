"""
Card generation with per-game uniqueness.

Each card is a random 36-artist subset of the game's pool, shown in a
random cell order. No two cards in one game may share the same set of
artist names; cell order and marker placement do not count towards that
comparison.

INVARIANTS:
- The set of seen identities is local to one generate_game() call
- Retries are bounded; exhaustion raises, never yields a partial game
- The marker is placed only after the identity has been recorded
"""

import logging
import random
from collections import Counter
from collections.abc import Iterable, Sequence

from musicbingo.config import CELLS_PER_CARD, MIN_ARTISTS, settings
from musicbingo.models.card import BingoCard, Grid
from musicbingo.models.failure import (
    ExhaustedUniqueGridsError,
    InsufficientArtistsError,
    InvalidCardCountError,
)
from musicbingo.services.marker import grid_from_names

logger = logging.getLogger(__name__)

IdentityKey = tuple[str, ...]


def identity_key(names: Iterable[str]) -> IdentityKey:
    """Canonical, order-independent identity of a grid's names."""
    return tuple(sorted(names))


def unique_grid_capacity(pool: Sequence[str], cells: int = CELLS_PER_CARD) -> int:
    """
    Number of distinct name multisets of size `cells` the pool can produce.

    Duplicate names in the pool are indistinguishable, so this counts
    multisets bounded by each name's multiplicity rather than plain
    combinations of pool entries.
    """
    # ways[k] = number of distinct multisets of size k seen so far
    ways = [1] + [0] * cells
    for multiplicity in Counter(pool).values():
        updated = [0] * (cells + 1)
        for size, count in enumerate(ways):
            if not count:
                continue
            for take in range(min(multiplicity, cells - size) + 1):
                updated[size + take] += count
        ways = updated
    return ways[cells]


def generate_card(
    pool: Sequence[str],
    seen: set[IdentityKey],
    has_marker: bool,
    rng: random.Random,
    max_attempts: int,
) -> Grid:
    """
    Produce one grid whose identity is not yet in `seen`.

    Args:
        pool: Artist names, at least 36 entries
        seen: Identities already used in this generation run, updated in place
        has_marker: Whether to mark one random cell
        rng: Source of randomness
        max_attempts: Shuffles to try before giving up

    Returns:
        A grid of 36 cells

    Raises:
        InsufficientArtistsError: If the pool cannot fill a grid
        ExhaustedUniqueGridsError: If no new identity turned up in time
    """
    if len(pool) < MIN_ARTISTS:
        raise InsufficientArtistsError(available=len(pool))

    candidates = list(pool)
    for attempt in range(1, max_attempts + 1):
        rng.shuffle(candidates)
        chosen = candidates[:CELLS_PER_CARD]
        key = identity_key(chosen)
        if key in seen:
            logger.debug("Duplicate grid on attempt %d, reshuffling", attempt)
            continue

        seen.add(key)
        # Display order must not reveal the sorted identity
        names = list(key)
        rng.shuffle(names)
        marker_position = rng.randrange(len(names)) if has_marker else None
        return grid_from_names(names, marker_position)

    logger.warning(
        "No unique grid after %d attempts (%d grids already generated)",
        max_attempts,
        len(seen),
    )
    raise ExhaustedUniqueGridsError(
        requested=len(seen) + 1,
        generated=len(seen),
        attempts=max_attempts,
    )


def generate_game(
    pool: Sequence[str],
    card_count: int,
    has_marker: bool,
    rng: random.Random | None = None,
    max_attempts: int | None = None,
) -> list[Grid]:
    """
    Generate `card_count` pairwise-unique grids for one game.

    Grids are returned in generation order; position + 1 is the card number.
    Pass a seeded `random.Random` for reproducible output. Production calls
    draw from the operating system's entropy source.

    Raises:
        InvalidCardCountError: If card_count < 1
        InsufficientArtistsError: If the pool has fewer than 36 entries
        ExhaustedUniqueGridsError: If the pool cannot supply enough unique grids
    """
    if card_count < 1:
        raise InvalidCardCountError(card_count)
    if len(pool) < MIN_ARTISTS:
        raise InsufficientArtistsError(available=len(pool))

    capacity = unique_grid_capacity(pool)
    if card_count > capacity:
        raise ExhaustedUniqueGridsError(requested=card_count, generated=capacity)

    rng = rng if rng is not None else random.SystemRandom()
    attempts = max_attempts if max_attempts is not None else settings.max_generation_attempts

    logger.info(
        "Generating %d cards from %d artists (marker=%s)",
        card_count,
        len(pool),
        has_marker,
    )

    seen: set[IdentityKey] = set()
    grids: list[Grid] = []
    for _ in range(card_count):
        try:
            grids.append(generate_card(pool, seen, has_marker, rng, attempts))
        except ExhaustedUniqueGridsError as e:
            raise ExhaustedUniqueGridsError(
                requested=card_count,
                generated=len(grids),
                attempts=e.attempts,
            ) from e

    logger.info("Generated %d unique cards", len(grids))
    return grids


def build_cards(grids: Iterable[Grid], game_id: int | None = None) -> list[BingoCard]:
    """Number grids sequentially from 1."""
    return [
        BingoCard(card_number=number, grid=grid, game_id=game_id)
        for number, grid in enumerate(grids, start=1)
    ]
