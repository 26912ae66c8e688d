from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Patient API configuration."""

    APP_NAME: str = "Patient Records API"
    DEBUG: bool = False

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017/patients"
    MONGODB_DB: str = "patients"
    MONGODB_COLLECTION: str = "patients"
    MONGODB_TIMEOUT_MS: int = 5000

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS - comma-separated origins from the environment
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    model_config = SettingsConfigDict(env_file=".env")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
