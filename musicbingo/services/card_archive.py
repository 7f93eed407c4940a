"""Packaging rendered cards into a single downloadable zip."""

import io
import logging
import zipfile
from collections.abc import Iterable

from musicbingo.models.card import BingoCard
from musicbingo.services.card_renderer import CardRenderer

logger = logging.getLogger(__name__)


def archive_filename(game_id: int) -> str:
    """Download name for a game's card archive."""
    return f"bingo-cards-game-{game_id}.zip"


def card_image_name(card: BingoCard) -> str:
    return f"card-{card.card_number}.png"


def build_card_archive(cards: Iterable[BingoCard], renderer: CardRenderer) -> bytes:
    """
    Render every card and bundle the images into a zip.

    Entries are written in card-number order.
    """
    ordered = sorted(cards, key=lambda card: card.card_number)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for card in ordered:
            archive.writestr(card_image_name(card), renderer.render(card))

    logger.info("Packed %d card images into archive", len(ordered))
    return buffer.getvalue()
