from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "cardsieve"
    debug: bool = False

    # Authored collection defaults, overridable per query
    default_filter_mode: str = "and"
    default_sort: str = "featured"
    search_fields: list[str] = Field(
        default_factory=lambda: ["contentArea.title", "contentArea.description"]
    )

    # Random sort: reservoir_size cards are shuffled, sample_size are kept
    sample_size: int = 10
    reservoir_size: int = 100

    results_per_page: int = 12

    highlight_css_class: str = "cardsieve-SearchResult"

    # Most recent per-query stage counts kept in memory
    metrics_history_size: int = 100


settings = Settings()


# =============================================================================
# CARD FIELD PATHS
# =============================================================================

TITLE_PATH = "contentArea.title"
CARD_DATE_PATH = "cardDate"
MODIFIED_DATE_PATH = "modifiedDate"

# Separator between a panel name and the option in a filter or tag id
PANEL_SEPARATOR = "/"
