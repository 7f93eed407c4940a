"""
Game API endpoints.

Create games, fetch their cards, download card images, and compute live
statistics during play.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from musicbingo.config import settings
from musicbingo.db import (
    card_to_model,
    create_game,
    delete_game,
    game_to_model,
    get_game,
    list_games,
)
from musicbingo.db.database import get_session
from musicbingo.models.card import BingoCard
from musicbingo.models.db import GameDB
from musicbingo.models.failure import GameNotFoundError
from musicbingo.services.artist_pool import parse_artist_list, validate_pool
from musicbingo.services.card_archive import archive_filename, build_card_archive
from musicbingo.services.card_generator import generate_game
from musicbingo.services.card_renderer import CardRenderer, PillowCardRenderer
from musicbingo.services.stats_engine import compute_stats, near_complete

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])


class GameCreateRequest(BaseModel):
    """Request body for creating a game."""

    name: str = Field(..., min_length=1, max_length=255)
    artists: str | list[str] = Field(
        ...,
        description="Artist names, either a list or newline-separated text",
    )
    card_count: int = Field(..., ge=1, le=settings.max_card_count)
    has_marker: bool = False


class GameResponse(BaseModel):
    """Response model for a game without its cards."""

    id: int
    name: str
    card_count: int
    artists: list[str]
    has_marker: bool
    status: str


class CardResponse(BaseModel):
    """Response model for a single card."""

    card_number: int
    grid: list[str] = Field(description="Cell texts in row-major order, marker included")
    marker_position: int | None = None


class CardListResponse(BaseModel):
    """Response model for a game's cards."""

    game_id: int
    cards: list[CardResponse]
    count: int


class StatsRequest(BaseModel):
    """Current play selections."""

    called_artists: list[str] = Field(default_factory=list)
    excluded_cards: list[int] = Field(default_factory=list)


class CardStatResponse(BaseModel):
    card_number: int
    remaining: int
    is_complete: bool


class StatsResponse(BaseModel):
    """Ranked snapshot of card progress."""

    cards: list[CardStatResponse]
    winners: list[int]
    total_cards: int
    near_complete: list[int]


def get_renderer() -> CardRenderer:
    """Dependency that provides the card image renderer."""
    return PillowCardRenderer(template_path=settings.card_template_path)


def _game_response(game: GameDB) -> GameResponse:
    return GameResponse(
        id=game.id,
        name=game.name,
        card_count=game.card_count,
        artists=list(game.artists),
        has_marker=game.has_marker,
        status=game.status,
    )


def _card_response(card: BingoCard) -> CardResponse:
    return CardResponse(
        card_number=card.card_number,
        grid=[cell.display for cell in card.grid],
        marker_position=card.marker_position,
    )


async def _require_game(session: AsyncSession, game_id: int) -> GameDB:
    game = await get_game(session, game_id)
    if game is None:
        raise GameNotFoundError(game_id)
    return game


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def create_new_game(
    request: GameCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameResponse:
    """
    Create a game and generate its cards.

    Fails with 400 if fewer than 36 artists are supplied, or 409 if the
    artist list cannot produce enough distinct cards.
    """
    pool = validate_pool(parse_artist_list(request.artists))
    grids = await run_in_threadpool(generate_game, pool, request.card_count, request.has_marker)

    game = await create_game(
        session,
        name=request.name,
        artists=pool,
        card_count=request.card_count,
        has_marker=request.has_marker,
        grids=grids,
    )
    logger.info("Created game %d '%s' with %d cards", game.id, game.name, game.card_count)
    return _game_response(game)


@router.get("", response_model=list[GameResponse])
async def get_games(
    session: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[GameResponse]:
    """List games, newest first."""
    games = await list_games(session, limit=limit)
    return [_game_response(game) for game in games]


@router.get("/{game_id}", response_model=GameResponse)
async def get_game_by_id(
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GameResponse:
    """
    Get a single game.

    Returns 404 if the game does not exist.
    """
    return _game_response(await _require_game(session, game_id))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game_by_id(
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete a game and all its cards."""
    if not await delete_game(session, game_id):
        raise GameNotFoundError(game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{game_id}/cards", response_model=CardListResponse)
async def get_cards(
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardListResponse:
    """Get a game's cards in card-number order."""
    game = await _require_game(session, game_id)
    cards = [_card_response(card_to_model(card)) for card in game.cards]
    return CardListResponse(game_id=game.id, cards=cards, count=len(cards))


@router.get("/{game_id}/cards/archive")
async def download_cards(
    game_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    renderer: Annotated[CardRenderer, Depends(get_renderer)],
) -> Response:
    """Render every card as an image and return them as a zip download."""
    game = await _require_game(session, game_id)
    cards = [card_to_model(card) for card in game.cards]

    logger.info("Building card archive for game %d (%d cards)", game.id, len(cards))
    payload = await run_in_threadpool(build_card_archive, cards, renderer)

    return Response(
        content=payload,
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={archive_filename(game.id)}"},
    )


@router.post("/{game_id}/stats", response_model=StatsResponse)
async def get_stats(
    game_id: int,
    selection: StatsRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> StatsResponse:
    """
    Compute live statistics for the current selections.

    Cards are ranked closest-to-winning first. Excluded card numbers that do
    not belong to the game are ignored.
    """
    game = game_to_model(await _require_game(session, game_id))
    snapshot = compute_stats(game.cards, selection.called_artists, selection.excluded_cards)

    return StatsResponse(
        cards=[
            CardStatResponse(
                card_number=stat.card_number,
                remaining=stat.remaining,
                is_complete=stat.is_complete,
            )
            for stat in snapshot.per_card_stats
        ],
        winners=snapshot.winners,
        total_cards=snapshot.total_cards,
        near_complete=[stat.card_number for stat in near_complete(snapshot)],
    )
