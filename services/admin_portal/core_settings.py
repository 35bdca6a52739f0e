from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    # e.g. http://inventory:8000/api; unset means every admin check is denied
    INVENTORY_API_BASE_URL: Optional[str] = None
    HTTP_TIMEOUT_SEC: float = 5.0

    TOKEN_COOKIE: str = "APP_AT"
    ROLE_COOKIE: str = "APP_ROLE"
    LOGIN_PATH: str = "/login"
    LANDING_PATH: str = "/owner"

    LOG_LEVEL: str = "INFO"
    SERVICE_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    return Settings()
