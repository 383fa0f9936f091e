"""Configuration management for the Vote API service."""
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service configuration
    SERVICE_NAME: str = "vote-api"
    DEBUG: bool = False

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 80
    STATIC_DIR: str = str(Path(__file__).resolve().parent / "static")

    # MySQL configuration
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASS: str = ""
    DB_NAME: str = "votes"

    # Connection pool
    DB_POOL_SIZE: int = 10

    # Startup retry configuration
    DB_CONNECT_RETRIES: int = 10
    DB_RETRY_DELAY: float = 3.0

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def connection_kwargs(self) -> dict:
        """Keyword arguments for aiomysql.create_pool."""
        return {
            "host": self.DB_HOST,
            "port": self.DB_PORT,
            "user": self.DB_USER,
            "password": self.DB_PASS,
            "db": self.DB_NAME,
        }


settings = Settings()
