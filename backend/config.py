# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path
from urllib.parse import quote_plus

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    RESET_TOKEN_EXPIRE_HOURS: int = 24

    # Either a full URL or the MySQL parts below
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_DATABASE: str = "hr_portal"

    # Connection pool and startup retry
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: int = 60
    DB_POOL_RECYCLE: int = 3600
    DB_CONNECT_TIMEOUT: int = 10
    DB_CONNECT_RETRIES: int = 5
    DB_RETRY_DELAY: float = 5.0

    # Outgoing mail; messages are only logged when SMTP_HOST is empty
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    EMAIL_FROM: str = "info@hr-portal.local"

    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            password = quote_plus(self.DB_PASSWORD)
            return (
                f"mysql+mysqlconnector://{self.DB_USER}:{password}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_DATABASE}"
            )
        return "sqlite:///./hr_portal.db"

settings = Settings()
