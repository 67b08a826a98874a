from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "DaysSince"
    database_url: str = Field(..., alias="DATABASE_URL")
    debug: bool = Field(False, alias="DEBUG")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    jwt_secret: str = Field(..., alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    jwt_access_expiration_minutes: int = Field(15, alias="JWT_ACCESS_EXPIRATION_MINUTES")
    jwt_refresh_expiration_minutes: int = Field(60 * 24 * 7, alias="JWT_REFRESH_EXPIRATION_MINUTES")

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3001"], alias="CORS_ORIGINS")


@lru_cache
def get_settings() -> Settings:
    return Settings()
