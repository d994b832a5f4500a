import logging
from logging.config import dictConfig
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "local"

    # Database (async SQLAlchemy URL)
    DATABASE_URL: str = "sqlite+aiosqlite:///./tracker.db"
    DATABASE_ECHO: bool = False

    # JWT issued by the sign-in provider
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRY: int = 3600
    SESSION_COOKIE_NAME: str = "session_token"

    # Redis
    REDIS_HOST_PROD: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""

    # Rate limiting (requests per window, window in seconds)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_READ: int = 100
    RATE_LIMIT_WRITE: int = 30
    RATE_LIMIT_WINDOW: int = 60

    # History
    HISTORY_PAGE_SIZE: int = 50
    HISTORY_MAX_ENTRIES: int = 200
    HISTORY_RETAINED_ENTRIES: int = 500

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def REDIS_HOST(self) -> str:
        if self.ENVIRONMENT == "local":
            return "localhost"
        return self.REDIS_HOST_PROD

    @property
    def IS_DEVELOPMENT(self) -> bool:
        return self.ENVIRONMENT in ("local", "development")


Config = Settings()

# Ensure logs directory exists
log_dir = Path(Config.LOG_FILE).parent
log_dir.mkdir(parents=True, exist_ok=True)


def configure_logging():
    """Configure logging for the application."""
    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": Config.LOG_LEVEL,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "detailed",
                "filename": Config.LOG_FILE,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "level": Config.LOG_LEVEL,
            },
        },
        "loggers": {
            "app": {
                "handlers": ["console", "file"],
                "level": Config.LOG_LEVEL,
                "propagate": False,
            },
            "tracker.client": {
                "handlers": ["console", "file"],
                "level": Config.LOG_LEVEL,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": Config.LOG_LEVEL,
        },
    }
    dictConfig(log_config)
    return logging.getLogger("app")


# Initialize logger
logger = configure_logging()
