"""
Decorative marker placement.

Grids carry the marker as a flag on one Cell, never inside the name, so a
cell's name is always the artist name exactly as given. Cell.display adds
the heart glyphs for printed cards.
"""

from collections.abc import Iterable

from musicbingo.models.card import Cell, Grid


def grid_from_names(names: Iterable[str], marker_position: int | None = None) -> Grid:
    """
    Build a grid from names in cell order.

    Names are taken verbatim. Only the cell at `marker_position`, if any,
    is marked.
    """
    return tuple(
        Cell(name=name, has_marker=index == marker_position) for index, name in enumerate(names)
    )
