"""Application Settings - Central Configuration"""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "civic_queue_dev"

    # Logging
    logs_path: str = "./logs"
    log_level: str = "INFO"

    # API server (run.py)
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    reload: bool = False

    # CORS - set to "*" to allow all origins
    cors_origins: str = "*"

    # Admin surface (seed / inspect routing config)
    # Empty token disables the admin endpoints entirely
    admin_init_token: str = ""

    # Queue and routing
    complaint_id_max_attempts: int = 5  # Regenerate CIR-... ids on collision
    escalation_max_attempts: int = 3  # Conditional update retries on concurrent escalation
    seed_routing_on_startup: bool = False

    # Environment
    environment: str = "development"
    debug: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string to list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
