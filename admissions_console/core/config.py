from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path
from dotenv import load_dotenv

# Load .env file explicitly
# Path from admissions_console/core/config.py to project root .env
env_file = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_file)


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = "sqlite:///./admissions_console.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE_SEC: int = 1800
    AUTO_CREATE_TABLES: bool = True

    # Token settings
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_REQUESTS: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Configuration console
    CONFIGURATION_BASE_PATH: str = "/admin/configuration"
    DEFAULT_CONFIGURATION_SECTION: str = "programs"
    DATE_DISPLAY_FORMAT: str = "%b %d, %Y"
    ARRAY_CHIP_LIMIT: int = 3

    class Config:
        env_file = Path(__file__).parent.parent.parent / ".env"
        case_sensitive = False  # Allow case-insensitive environment variables


# Create settings instance
settings = Settings()
