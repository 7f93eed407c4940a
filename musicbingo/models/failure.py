"""
Failure envelope for API responses.

Every error the service reports to an operator is classified by a
FailureKind and carried inside one ApiResponse shape, so the frontend renders
one structure for every failure.

Response types:
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed

Domain errors subclass KnownError. The application registers a single
exception handler that turns any KnownError into its ApiResponse with the
error's HTTP status code.
"""

from enum import Enum

from pydantic import BaseModel, Field

from musicbingo.config import MIN_ARTISTS


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INSUFFICIENT_ARTISTS = "insufficient_artists"

    # Resource failures
    NOT_FOUND = "not_found"
    TEMPLATE_MISSING = "template_missing"

    # Generation failures
    EXHAUSTED_UNIQUE_GRIDS = "exhausted_unique_grids"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel):
    """
    Response envelope for failures.

    Every failure is classified into one outcome type, so none reaches the
    operator unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    failure: FailureDetail = Field(
        ...,
        description="What went wrong and what to do about it",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: Game not found, artist pool too small.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(
        cls,
        detail: str | None = None,
    ) -> "ApiResponse":
        """
        Create an unknown failure response.

        Catch-all for unexpected exceptions. The message is fixed.
        """
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong. Try again in a moment.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InsufficientArtistsError(KnownError):
    """
    Raised when an artist pool cannot fill a single grid.

    A game needs at least one artist per cell.
    """

    def __init__(self, available: int, required: int = MIN_ARTISTS):
        self.available = available
        self.required = required
        super().__init__(
            kind=FailureKind.INSUFFICIENT_ARTISTS,
            message=f"Need at least {required} artists for a 6x6 grid, got {available}.",
            suggestion="Add more artists to the list, one per line.",
            status_code=400,
        )


class InvalidCardCountError(KnownError):
    """Raised when a game is requested with a non-positive card count."""

    def __init__(self, card_count: int):
        self.card_count = card_count
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Card count must be at least 1, got {card_count}.",
            status_code=400,
        )


class ExhaustedUniqueGridsError(KnownError):
    """
    Raised when no further unique grid can be produced for a game.

    Either the pool has fewer distinct 36-artist combinations than cards
    requested, or the retry bound ran out before a new combination turned up.
    Generation never returns a partial game.
    """

    def __init__(self, requested: int, generated: int, attempts: int | None = None):
        self.requested = requested
        self.generated = generated
        self.attempts = attempts
        detail = None
        if attempts is not None:
            detail = f"Gave up after {attempts} attempts on card {generated + 1}"
        super().__init__(
            kind=FailureKind.EXHAUSTED_UNIQUE_GRIDS,
            message=(
                f"Unable to generate {requested} unique cards. "
                f"Only {generated} distinct cards could be produced from this artist list."
            ),
            detail=detail,
            suggestion="Add more artists or request fewer cards.",
            status_code=409,
        )


class GameNotFoundError(KnownError):
    """Raised when a game id does not exist."""

    def __init__(self, game_id: int):
        self.game_id = game_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Game {game_id} not found.",
            status_code=404,
        )


class TemplateNotFoundError(KnownError):
    """Raised when the configured card template image is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            kind=FailureKind.TEMPLATE_MISSING,
            message="Card template file not found.",
            detail=path,
            suggestion="Check the card_template_path setting.",
            status_code=500,
        )
