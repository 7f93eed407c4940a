from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "MusicBingo"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/musicbingo"

    # Upper bound on shuffles spent looking for one new unique grid
    max_generation_attempts: int = 10_000

    # Largest game the API will generate in one request
    max_card_count: int = 1000

    # Cards with this many or fewer uncalled artists are reported as near-complete
    near_complete_threshold: int = 3

    # Optional background image for rendered cards
    card_template_path: str | None = None


settings = Settings()


# =============================================================================
# GRID GEOMETRY
# =============================================================================

GRID_SIZE = 6

CELLS_PER_CARD = GRID_SIZE * GRID_SIZE

# A pool must fill at least one full grid
MIN_ARTISTS = CELLS_PER_CARD


# =============================================================================
# MARKER
# =============================================================================

MARKER_GLYPH = "❤️"
