from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "petcare"
    POSTGRES_USER: str = "petcare"
    POSTGRES_PASSWORD: str = "petcare"
    # Full SQLAlchemy URL; overrides the POSTGRES_* parts when set
    DATABASE_URL: Optional[str] = None

    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    # Write endpoints require a bearer token carrying the ADMIN role
    REQUIRE_ADMIN: bool = True

    STATIC_ROOT: str = "wwwroot"
    PUBLIC_BASE_URL: Optional[str] = None
    MAX_PHOTO_BYTES: int = 5 * 1024 * 1024

    LOG_LEVEL: str = "INFO"
    SERVICE_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def photo_dir(self) -> str:
        return f"{self.STATIC_ROOT.rstrip('/')}/images/inventory"

@lru_cache
def get_settings() -> Settings:
    return Settings()
