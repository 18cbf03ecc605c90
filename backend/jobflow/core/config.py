"""Application configuration using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Job Card Generation ---
    # Placeholder timing policy until per-process timing data is available
    DEFAULT_SETUP_TIME_MIN: int = 15
    DEFAULT_CYCLE_TIME_MIN: int = 30
    SYSTEM_USER: str = "system"

    # --- Denormalized display fallbacks ---
    DEFAULT_CUSTOMER_NAME: str = "Unknown Customer"
    DEFAULT_CUSTOMER_CODE: str = "CUST-000"
    DEFAULT_PRODUCT_NAME: str = "Unknown Product"
    DEFAULT_PRODUCT_CODE: str = "PROD-000"

    # --- Assembly ---
    ASSEMBLY_START_BUFFER_DAYS: int = 1


settings = Settings()
