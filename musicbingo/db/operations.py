"""
Database CRUD operations.

Provides async functions for creating, reading, and deleting games and
their cards.
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from musicbingo.models.card import BingoCard, Game, Grid
from musicbingo.models.db import BingoCardDB, GameDB
from musicbingo.services.marker import grid_from_names

# --- Game Operations ---


async def create_game(
    session: AsyncSession,
    name: str,
    artists: list[str],
    card_count: int,
    has_marker: bool,
    grids: Sequence[Grid],
) -> GameDB:
    """
    Persist a game together with its generated grids.

    Grids become cards numbered 1..n in the order given.
    """
    if len(grids) != card_count:
        msg = f"Expected {card_count} grids, got {len(grids)}"
        raise ValueError(msg)

    game = GameDB(
        name=name,
        artists=list(artists),
        card_count=card_count,
        has_marker=has_marker,
        status="created",
    )
    for number, grid in enumerate(grids, start=1):
        marker_position = next(
            (index for index, cell in enumerate(grid) if cell.has_marker),
            None,
        )
        game.cards.append(
            BingoCardDB(
                card_number=number,
                grid=[cell.name for cell in grid],
                marker_position=marker_position,
            )
        )

    session.add(game)
    await session.flush()
    return game


async def get_game(session: AsyncSession, game_id: int) -> GameDB | None:
    """
    Get a game by id with its cards loaded.

    Returns None if no such game exists.
    """
    result = await session.execute(
        select(GameDB).where(GameDB.id == game_id).options(selectinload(GameDB.cards))
    )
    return result.scalar_one_or_none()


async def list_games(session: AsyncSession, limit: int = 100) -> list[GameDB]:
    """Get games, newest first."""
    result = await session.execute(select(GameDB).order_by(GameDB.id.desc()).limit(limit))
    return list(result.scalars().all())


async def delete_game(session: AsyncSession, game_id: int) -> bool:
    """
    Delete a game and its cards.

    Returns True if deleted, False if not found.
    """
    game = await get_game(session, game_id)
    if not game:
        return False

    await session.delete(game)
    return True


def card_to_model(card: BingoCardDB) -> BingoCard:
    """Convert a database card to a domain model."""
    return BingoCard(
        card_number=card.card_number,
        grid=grid_from_names(card.grid, card.marker_position),
        game_id=card.game_id,
    )


def game_to_model(game: GameDB) -> Game:
    """Convert a database game to a domain model."""
    return Game(
        id=game.id,
        name=game.name,
        artists=list(game.artists),
        card_count=game.card_count,
        has_marker=game.has_marker,
        status=game.status,
        cards=[card_to_model(card) for card in game.cards],
    )
