from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="RULEZERO_")

    app_name: str = "RuleZero"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./rulezero.db"

    # Name of the stored rule document (one active configuration)
    rule_document_name: str = "default"

    moxfield_api_url: str = "https://api2.moxfield.com/v3/decks/all"
    archidekt_api_url: str = "https://archidekt.com/api/decks"
    scryfall_api_url: str = "https://api.scryfall.com"
    spellbook_api_url: str = "https://backend.commanderspellbook.com"

    http_timeout: float = 30.0
    user_agent: str = "RuleZero/1.0"


settings = Settings()


# =============================================================================
# UPSTREAM LIMITS
# =============================================================================

# Commander Spellbook page size for paginated card and combo queries
SPELLBOOK_PAGE_SIZE = 100

# Maximum number of cards returned from a Scryfall search
MAX_SEARCH_RESULTS = 20

# Minimum query length before autocomplete hits Scryfall
MIN_AUTOCOMPLETE_LENGTH = 2

# Text messages are split below this many characters
MESSAGE_CHUNK_SIZE = 1900
