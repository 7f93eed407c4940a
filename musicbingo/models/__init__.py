from musicbingo.models.card import (
    BingoCard,
    CardStat,
    Cell,
    Game,
    Grid,
    SelectionState,
    StatsSnapshot,
)
from musicbingo.models.failure import (
    ApiResponse,
    ExhaustedUniqueGridsError,
    FailureDetail,
    FailureKind,
    GameNotFoundError,
    InsufficientArtistsError,
    InvalidCardCountError,
    KnownError,
    OutcomeType,
    TemplateNotFoundError,
)

__all__ = [
    "ApiResponse",
    "BingoCard",
    "CardStat",
    "Cell",
    "ExhaustedUniqueGridsError",
    "FailureDetail",
    "FailureKind",
    "Game",
    "GameNotFoundError",
    "Grid",
    "InsufficientArtistsError",
    "InvalidCardCountError",
    "KnownError",
    "OutcomeType",
    "SelectionState",
    "StatsSnapshot",
    "TemplateNotFoundError",
]
