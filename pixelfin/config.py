"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "pixelfin-ledger"
    log_level: str = "INFO"

    # Persistence boundary
    storage_backend: str = "file"  # memory | file | sql | http
    storage_key: str = "@pixelfin/transactions/v1"
    data_dir: str = "./data"
    database_url: str = "sqlite:///./pixelfin.db"
    storage_api_base: str = "http://localhost:8002"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Trend analysis
    trend_window_days: int = 7
    trend_timezone: str = "UTC"

    default_currency: str = "USD"


settings = Settings()
