"""Parsing and validation of operator-supplied artist lists."""

from musicbingo.config import MIN_ARTISTS
from musicbingo.models.failure import InsufficientArtistsError


def parse_artist_list(raw: str | list[str]) -> list[str]:
    """
    Turn operator input into an artist pool.

    Text is split on newlines. Entries are stripped and blanks dropped;
    order and duplicates are kept.
    """
    entries = raw.splitlines() if isinstance(raw, str) else raw
    return [entry.strip() for entry in entries if entry.strip()]


def validate_pool(pool: list[str]) -> list[str]:
    """Return the pool unchanged, or raise if it cannot fill one grid."""
    if len(pool) < MIN_ARTISTS:
        raise InsufficientArtistsError(available=len(pool))
    return pool
