"""
MusicBingo services.

Card generation, live statistics, and card image packaging.
"""

from musicbingo.services.artist_pool import parse_artist_list, validate_pool
from musicbingo.services.card_archive import archive_filename, build_card_archive
from musicbingo.services.card_generator import (
    build_cards,
    generate_card,
    generate_game,
    identity_key,
    unique_grid_capacity,
)
from musicbingo.services.card_renderer import CardRenderer, PillowCardRenderer
from musicbingo.services.marker import grid_from_names
from musicbingo.services.stats_engine import card_stat, compute_stats, near_complete

__all__ = [
    "CardRenderer",
    "PillowCardRenderer",
    "archive_filename",
    "build_card_archive",
    "build_cards",
    "card_stat",
    "compute_stats",
    "generate_card",
    "generate_game",
    "grid_from_names",
    "identity_key",
    "near_complete",
    "parse_artist_list",
    "unique_grid_capacity",
    "validate_pool",
]
