"""
Card image rendering.

Draws a card's 6x6 grid and its number onto a template image (or a blank
canvas when no template is configured) and returns PNG bytes. Layout is kept
plain: the grid fills the central area of the image, each
name is word-wrapped to its cell, and the card number sits top-right.
"""

import io
import logging
import os
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageDraw, ImageFont

from musicbingo.config import GRID_SIZE
from musicbingo.models.card import BingoCard
from musicbingo.models.failure import TemplateNotFoundError

logger = logging.getLogger(__name__)

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont

# Fractions of the image occupied by the grid
GRID_LEFT = 0.1
GRID_TOP = 0.25
GRID_WIDTH = 0.8
GRID_HEIGHT = 0.6

# Card number position
NUMBER_X = 0.85
NUMBER_Y = 0.12

BLANK_SIZE = (1200, 1600)
CELL_PADDING = 20

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "C:/Windows/Fonts/arialbd.ttf",
]


class CardRenderer(Protocol):
    """Anything that turns a card into image bytes."""

    def render(self, card: BingoCard) -> bytes: ...


def _load_font(size: int, font_path: str | None = None) -> FontType:
    for candidate in [font_path, *_FONT_CANDIDATES]:
        if candidate and os.path.exists(candidate):
            return ImageFont.truetype(candidate, size)
    return ImageFont.load_default(size=size)


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font: FontType, max_width: float) -> list[str]:
    """Greedy word wrap. A single over-long word gets a line of its own."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class PillowCardRenderer:
    """Renders cards as PNG images with Pillow."""

    def __init__(
        self,
        template_path: str | None = None,
        font_path: str | None = None,
        font_size: int = 32,
        number_font_size: int = 28,
    ):
        if template_path is not None and not Path(template_path).is_file():
            raise TemplateNotFoundError(template_path)
        self.template_path = template_path
        self.font = _load_font(font_size, font_path)
        self.number_font = _load_font(number_font_size, font_path)
        self.line_height = int(font_size * 1.125)

    def _canvas(self) -> Image.Image:
        if self.template_path is None:
            return Image.new("RGB", BLANK_SIZE, "white")
        with Image.open(self.template_path) as template:
            return template.convert("RGB")

    def render(self, card: BingoCard) -> bytes:
        image = self._canvas()
        draw = ImageDraw.Draw(image)
        width, height = image.size

        grid_x = width * GRID_LEFT
        grid_y = height * GRID_TOP
        cell_w = width * GRID_WIDTH / GRID_SIZE
        cell_h = height * GRID_HEIGHT / GRID_SIZE

        for row_index, row in enumerate(card.rows()):
            for col_index, cell in enumerate(row):
                center_x = grid_x + (col_index + 0.5) * cell_w
                center_y = grid_y + (row_index + 0.5) * cell_h

                lines = wrap_text(draw, cell.display, self.font, cell_w - CELL_PADDING)
                top = center_y - (len(lines) - 1) * self.line_height / 2
                for line_index, line in enumerate(lines):
                    draw.text(
                        (center_x, top + line_index * self.line_height),
                        line,
                        font=self.font,
                        fill="black",
                        anchor="mm",
                        stroke_width=2,
                        stroke_fill="white",
                    )

        draw.text(
            (width * NUMBER_X, height * NUMBER_Y),
            str(card.card_number),
            font=self.number_font,
            fill="black",
            anchor="mm",
        )

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        logger.debug("Rendered card %d (%dx%d)", card.card_number, width, height)
        return buffer.getvalue()
