from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


# =============================================================================
# MATCHING LIMITS
# =============================================================================

# Queries shorter than this (after lower-casing, before normalization)
# never reach the matcher
MIN_QUERY_LENGTH = 3

# Fuzzy candidates must score strictly above this ratio
FUZZY_RATIO_THRESHOLD = 0.70


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "MarvelBot"
    debug: bool = False
    log_level: str = "INFO"

    # Card directories are read in order; homebrew cards follow official ones
    cards_dirs: list[Path] = [DATA_DIR / "cards", DATA_DIR / "homebrew"]
    rules_dir: Path = DATA_DIR / "rules"

    marvelcdb_url: str = "https://marvelcdb.com/api/public"

    min_query_length: int = MIN_QUERY_LENGTH
    fuzzy_threshold: float = FUZZY_RATIO_THRESHOLD


settings = Settings()
