"""Tests for game API endpoints."""

import io
import threading
import zipfile
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from musicbingo.api.games import get_renderer
from musicbingo.main import app
from musicbingo.models.card import BingoCard
from musicbingo.services.card_generator import generate_game


class FakeRenderer:
    def render(self, card: BingoCard) -> bytes:
        return f"card {card.card_number}".encode()


@pytest.fixture
def fake_renderer():
    app.dependency_overrides[get_renderer] = FakeRenderer
    yield
    app.dependency_overrides.pop(get_renderer, None)


async def _create(client: AsyncClient, artists, card_count: int = 3, has_marker: bool = False):
    return await client.post(
        "/games",
        json={
            "name": "Friday Night",
            "artists": artists,
            "card_count": card_count,
            "has_marker": has_marker,
        },
    )


class TestCreateGame:
    async def test_create_from_list(self, client: AsyncClient, pool_40: list[str]) -> None:
        response = await _create(client, pool_40, card_count=5, has_marker=True)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Friday Night"
        assert data["card_count"] == 5
        assert data["has_marker"] is True
        assert data["status"] == "created"
        assert data["artists"] == pool_40

    async def test_create_from_text(self, client: AsyncClient, pool_40: list[str]) -> None:
        """Newline-separated text is split, trimmed and blank lines dropped."""
        raw = "\n".join(f"  {name}  " for name in pool_40) + "\n\n"

        response = await _create(client, raw)

        assert response.status_code == 201
        assert response.json()["artists"] == pool_40

    async def test_too_few_artists(self, client: AsyncClient, pool_factory) -> None:
        response = await _create(client, pool_factory(35))

        assert response.status_code == 400
        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "insufficient_artists"

    async def test_blank_lines_do_not_count(self, client: AsyncClient, pool_factory) -> None:
        raw = "\n".join(pool_factory(35)) + "\n   \n\n"

        response = await _create(client, raw)

        assert response.status_code == 400

    async def test_impossible_uniqueness(self, client: AsyncClient, pool_36: list[str]) -> None:
        """36 artists can only make one distinct card."""
        response = await _create(client, pool_36, card_count=2)

        assert response.status_code == 409
        assert response.json()["failure"]["kind"] == "exhausted_unique_grids"

    async def test_failed_creation_stores_nothing(
        self, client: AsyncClient, pool_36: list[str]
    ) -> None:
        await _create(client, pool_36, card_count=2)

        response = await client.get("/games")

        assert response.json() == []

    async def test_card_count_must_be_positive(
        self, client: AsyncClient, pool_40: list[str]
    ) -> None:
        response = await _create(client, pool_40, card_count=0)

        assert response.status_code == 422

    async def test_generation_runs_off_the_event_loop(
        self, client: AsyncClient, pool_40: list[str]
    ) -> None:
        """Card generation is handed to a worker thread."""
        threads = []

        def recording_generate(*args, **kwargs):
            threads.append(threading.get_ident())
            return generate_game(*args, **kwargs)

        with patch("musicbingo.api.games.generate_game", side_effect=recording_generate):
            response = await _create(client, pool_40, card_count=2)

        assert response.status_code == 201
        assert len(threads) == 1
        assert threads[0] != threading.get_ident()


class TestGetGames:
    async def test_empty(self, client: AsyncClient) -> None:
        response = await client.get("/games")

        assert response.status_code == 200
        assert response.json() == []

    async def test_list(self, client: AsyncClient, pool_40: list[str]) -> None:
        await _create(client, pool_40)
        await _create(client, pool_40)

        response = await client.get("/games")

        assert len(response.json()) == 2

    async def test_get_by_id(self, client: AsyncClient, pool_40: list[str]) -> None:
        game_id = (await _create(client, pool_40)).json()["id"]

        response = await client.get(f"/games/{game_id}")

        assert response.status_code == 200
        assert response.json()["id"] == game_id

    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.get("/games/999")

        assert response.status_code == 404
        assert response.json()["failure"]["kind"] == "not_found"

    async def test_delete(self, client: AsyncClient, pool_40: list[str]) -> None:
        game_id = (await _create(client, pool_40)).json()["id"]

        response = await client.delete(f"/games/{game_id}")

        assert response.status_code == 204
        assert (await client.get(f"/games/{game_id}")).status_code == 404

    async def test_delete_not_found(self, client: AsyncClient) -> None:
        response = await client.delete("/games/999")

        assert response.status_code == 404


class TestGetCards:
    async def test_cards(self, client: AsyncClient, pool_40: list[str]) -> None:
        """Every card has 36 cells from the pool and a unique set of names."""
        game_id = (await _create(client, pool_40, card_count=5)).json()["id"]

        response = await client.get(f"/games/{game_id}/cards")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 5
        assert [card["card_number"] for card in data["cards"]] == [1, 2, 3, 4, 5]
        for card in data["cards"]:
            assert len(card["grid"]) == 36
            assert set(card["grid"]) <= set(pool_40)
            assert card["marker_position"] is None
        identities = {tuple(sorted(card["grid"])) for card in data["cards"]}
        assert len(identities) == 5

    async def test_marked_cards(self, client: AsyncClient, pool_40: list[str]) -> None:
        """The marked cell is shown decorated at marker_position."""
        game_id = (await _create(client, pool_40, card_count=2, has_marker=True)).json()["id"]

        data = (await client.get(f"/games/{game_id}/cards")).json()

        for card in data["cards"]:
            position = card["marker_position"]
            assert position is not None
            assert card["grid"][position].startswith("❤️ ")
            decorated = [text for text in card["grid"] if text.startswith("❤️ ")]
            assert len(decorated) == 1

    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.get("/games/999/cards")

        assert response.status_code == 404


class TestDownloadCards:
    async def test_archive(
        self,
        client: AsyncClient,
        pool_40: list[str],
        fake_renderer: None,  # noqa: ARG002
    ) -> None:
        game_id = (await _create(client, pool_40, card_count=3)).json()["id"]

        response = await client.get(f"/games/{game_id}/cards/archive")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert (
            response.headers["content-disposition"]
            == f"attachment; filename=bingo-cards-game-{game_id}.zip"
        )
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert archive.namelist() == ["card-1.png", "card-2.png", "card-3.png"]

    async def test_not_found(
        self,
        client: AsyncClient,
        fake_renderer: None,  # noqa: ARG002
    ) -> None:
        response = await client.get("/games/999/cards/archive")

        assert response.status_code == 404


class TestStats:
    async def _setup(self, client: AsyncClient, pool: list[str], card_count: int = 3):
        game_id = (await _create(client, pool, card_count=card_count)).json()["id"]
        cards = (await client.get(f"/games/{game_id}/cards")).json()["cards"]
        return game_id, cards

    async def test_empty_selection(self, client: AsyncClient, pool_40: list[str]) -> None:
        game_id, _ = await self._setup(client, pool_40)

        response = await client.post(f"/games/{game_id}/stats", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["total_cards"] == 3
        assert data["winners"] == []
        assert data["near_complete"] == []
        assert [card["remaining"] for card in data["cards"]] == [36, 36, 36]

    async def test_single_card_game(self, client: AsyncClient, pool_36: list[str]) -> None:
        """Pool of 36, one card: nothing called leaves 36 remaining."""
        game_id, _ = await self._setup(client, pool_36, card_count=1)

        data = (await client.post(f"/games/{game_id}/stats", json={})).json()

        assert data["cards"] == [{"card_number": 1, "remaining": 36, "is_complete": False}]

    async def test_winner(self, client: AsyncClient, pool_40: list[str]) -> None:
        game_id, cards = await self._setup(client, pool_40)
        winning = cards[1]

        response = await client.post(
            f"/games/{game_id}/stats",
            json={"called_artists": winning["grid"], "excluded_cards": []},
        )

        data = response.json()
        assert winning["card_number"] in data["winners"]
        assert data["cards"][0]["remaining"] == 0
        assert data["cards"][0]["is_complete"] is True

    async def test_excluded_winner(self, client: AsyncClient, pool_40: list[str]) -> None:
        """A complete card that is excluded is neither counted nor a winner."""
        game_id, cards = await self._setup(client, pool_40, card_count=2)

        response = await client.post(
            f"/games/{game_id}/stats",
            json={"called_artists": cards[0]["grid"], "excluded_cards": [1]},
        )

        data = response.json()
        assert data["winners"] == []
        assert data["total_cards"] == 1
        assert [card["card_number"] for card in data["cards"]] == [2]

    async def test_unknown_exclusion_ignored(
        self, client: AsyncClient, pool_40: list[str]
    ) -> None:
        game_id, _ = await self._setup(client, pool_40)

        response = await client.post(
            f"/games/{game_id}/stats",
            json={"called_artists": [], "excluded_cards": [42]},
        )

        assert response.status_code == 200
        assert response.json()["total_cards"] == 3

    async def test_marked_cell_matches_called_artist(
        self, client: AsyncClient, pool_40: list[str]
    ) -> None:
        """Calling the clean name crosses off the marked cell."""
        game_id = (await _create(client, pool_40, card_count=1, has_marker=True)).json()["id"]

        data = (
            await client.post(f"/games/{game_id}/stats", json={"called_artists": pool_40})
        ).json()

        assert data["winners"] == [1]

    async def test_artist_name_with_hearts_is_not_a_marker(
        self, client: AsyncClient, pool_factory
    ) -> None:
        """A real artist named with heart glyphs keeps its name and can still win."""
        pool = ["❤️ Love ❤️", *pool_factory(35)]
        game_id = (await _create(client, pool, card_count=1)).json()["id"]

        card = (await client.get(f"/games/{game_id}/cards")).json()["cards"][0]
        assert card["marker_position"] is None
        assert sorted(card["grid"]) == sorted(pool)

        data = (
            await client.post(f"/games/{game_id}/stats", json={"called_artists": pool})
        ).json()

        assert data["cards"] == [{"card_number": 1, "remaining": 0, "is_complete": True}]
        assert data["winners"] == [1]

    async def test_near_complete(self, client: AsyncClient, pool_40: list[str]) -> None:
        game_id, cards = await self._setup(client, pool_40, card_count=1)

        data = (
            await client.post(
                f"/games/{game_id}/stats",
                json={"called_artists": cards[0]["grid"][:34]},
            )
        ).json()

        assert data["near_complete"] == [1]
        assert data["cards"][0]["remaining"] == 2

    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.post("/games/999/stats", json={})

        assert response.status_code == 404
