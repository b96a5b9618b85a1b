from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PackForge"
    debug: bool = False

    scryfall_api_url: str = "https://api.scryfall.com"

    # Upper bound for fixed-quantity (booster box) requests over HTTP
    max_box_packs: int = 540

    # Pin the random source for every request (regression runs only)
    default_seed: int | None = None


settings = Settings()


# =============================================================================
# PACK COMPOSITION
# =============================================================================

COMMONS_PER_PACK = 10
UNCOMMONS_PER_PACK = 3

# Chance that the rare slot is upgraded to a mythic
MYTHIC_UPGRADE_CHANCE = 1 / 8

MIXED_PACK_LABEL = "Chaos / Mixed"
BOOSTER_PACK_LABEL = "Booster"


# =============================================================================
# RECORD FILTERS
# =============================================================================

# Scryfall set_type values for preconstructed / commander-oriented products
COMMANDER_SET_TYPES = frozenset(
    {"commander", "starter", "duel_deck", "premium_deck", "planechase", "archenemy"}
)

# Scryfall layouts that are not real booster cards
TOKEN_LAYOUTS = frozenset({"token", "double_faced_token", "art_series", "emblem"})
