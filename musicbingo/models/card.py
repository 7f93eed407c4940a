from dataclasses import dataclass, field

from musicbingo.config import GRID_SIZE, MARKER_GLYPH


@dataclass(frozen=True)
class Cell:
    """
    One square of a bingo grid.

    The marker is a sibling flag rather than part of the name, so identity
    comparisons and called-artist matching always see the clean name.
    """

    name: str
    has_marker: bool = False

    @property
    def display(self) -> str:
        """Text shown on the printed card."""
        if self.has_marker:
            return f"{MARKER_GLYPH} {self.name} {MARKER_GLYPH}"
        return self.name


Grid = tuple[Cell, ...]


@dataclass
class BingoCard:
    """
    A single numbered card belonging to a game.

    Attributes:
        card_number: 1-based position in generation order, unique per game
        grid: 36 cells in row-major order
        game_id: Owning game, None until persisted
    """

    card_number: int
    grid: Grid
    game_id: int | None = None

    def names(self) -> list[str]:
        """Clean artist names in cell order."""
        return [cell.name for cell in self.grid]

    @property
    def marker_position(self) -> int | None:
        """Index of the marked cell, or None if the card has no marker."""
        for index, cell in enumerate(self.grid):
            if cell.has_marker:
                return index
        return None

    def rows(self) -> list[list[Cell]]:
        """Grid split into rows for rendering."""
        return [list(self.grid[i : i + GRID_SIZE]) for i in range(0, len(self.grid), GRID_SIZE)]


@dataclass
class Game:
    """
    A bingo game and the cards generated for it.

    All cards in a game have pairwise-distinct sets of artist names.
    """

    id: int
    name: str
    artists: list[str]
    card_count: int
    has_marker: bool = False
    status: str = "created"
    cards: list[BingoCard] = field(default_factory=list)


@dataclass
class SelectionState:
    """
    Live-play selections for one session.

    Lives only as long as the play session; never written back to the game.
    """

    called_artists: set[str] = field(default_factory=set)
    excluded_card_numbers: set[int] = field(default_factory=set)

    def toggle_artist(self, name: str) -> bool:
        """Call or un-call an artist. Returns True if the artist is now called."""
        if name in self.called_artists:
            self.called_artists.discard(name)
            return False
        self.called_artists.add(name)
        return True

    def toggle_exclusion(self, card_number: int) -> bool:
        """Exclude or re-include a card. Returns True if the card is now excluded."""
        if card_number in self.excluded_card_numbers:
            self.excluded_card_numbers.discard(card_number)
            return False
        self.excluded_card_numbers.add(card_number)
        return True

    def clear(self) -> None:
        """Reset to an empty session."""
        self.called_artists.clear()
        self.excluded_card_numbers.clear()


@dataclass(frozen=True)
class CardStat:
    """Progress of one card against the called artists."""

    card_number: int
    remaining: int
    is_complete: bool


@dataclass(frozen=True)
class StatsSnapshot:
    """
    Ranked view of all considered cards.

    per_card_stats is ordered closest-to-winning first; winners lists
    complete cards in the same order.
    """

    per_card_stats: list[CardStat]
    winners: list[int]
    total_cards: int
