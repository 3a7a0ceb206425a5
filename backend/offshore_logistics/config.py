from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    LOG_LEVEL: str = "INFO"
    # Path to a reference catalog YAML; unset uses the bundled data/reference_catalog.yaml
    REFERENCE_CATALOG: str | None = None
    # Vessel fuzzy match threshold (0-100), applied only after exact/compressed alias lookup fails
    VESSEL_FUZZY_THRESHOLD: int = 92
    # Delivery capability analysis window (first month, number of months)
    ANALYSIS_WINDOW_START: str = "2025-01"
    ANALYSIS_WINDOW_MONTHS: int = 6
    # CLI diagnostics truncation
    MAX_DIAGNOSTICS_REPORTED: int = 50


settings = Settings()
