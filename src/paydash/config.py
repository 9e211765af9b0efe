"""Dashboard service configuration."""

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class DashboardConfig(BaseSettings):
    """Configuration for the dashboard API."""

    model_config = ConfigDict(
        env_prefix="PAYDASH_",
        env_file=".env",
        extra="ignore",  # Ignore extra fields from .env
    )

    # Service settings
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Sample data seeded into an empty store at startup
    seed_sample_data: bool = True
    sample_size: int = 200


config = DashboardConfig()
