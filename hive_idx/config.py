from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"
    IDX_DB_URL: str = "sqlite+aiosqlite:///./hive_idx.db"

    # --- Minimal inbound auth for debug routes (API key) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- SourceRE RESO OData (Hive MLS) ---
    # Empty key is allowed; the listings routes report it instead of calling out.
    SOURCERE_API_KEY: str = ""
    SOURCERE_API_BASE: str = "https://api.sourceredb.com/odata/"
    HTTP_TIMEOUT_S: float = 12.0

    # --- Response cache ---
    LISTINGS_CACHE_TTL_S: int = 300  # 5 minutes
    LISTINGS_CACHE_BACKEND: str = "memory"  # memory|sql

    # --- Query defaults (override without touching the builder) ---
    RENTAL_PROPERTY_TYPE: str = "Residential Lease"
    EXCLUDED_STATUSES: list[str] = ["Closed", "Canceled", "Expired"]

    # False gives the "lite" variant: city/price/beds/baths/type filters only
    EXTENDED_FILTERS: bool = True


settings = Settings()
