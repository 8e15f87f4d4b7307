"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    loans_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "fincalc-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Comparison
    default_sort_key: str = "emi"
    default_tenure_years: float = 20
    min_compare_offers: int = 2
    max_compare_offers: int = 10


settings = Settings()
