"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./branchwatch.db"

    # Service
    service_name: str = "branchwatch"
    log_level: str = "INFO"

    # Risk-change webhook (unset disables notifications)
    risk_webhook_url: Optional[str] = None

    # Map view default center (Davao City)
    map_center_lat: float = 7.0731
    map_center_lng: float = 125.6128

    # HTTP Client
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = Field(5, ge=1)
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds


settings = Settings()
