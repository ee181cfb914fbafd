from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    # Pool sizing is ignored for SQLite URLs.
    db_pool_size: int = Field(6, alias="DB_POOL_SIZE")
    db_pool_timeout: int = Field(10, alias="DB_POOL_TIMEOUT")
    db_pool_recycle: int = Field(300, alias="DB_POOL_RECYCLE")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
