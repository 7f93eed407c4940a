from musicbingo.db.database import get_session, init_db
from musicbingo.db.operations import (
    card_to_model,
    create_game,
    delete_game,
    game_to_model,
    get_game,
    list_games,
)

__all__ = [
    "card_to_model",
    "create_game",
    "delete_game",
    "game_to_model",
    "get_game",
    "get_session",
    "init_db",
    "list_games",
]
