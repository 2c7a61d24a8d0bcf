from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import List, Optional, Union


class Settings(BaseSettings):
    PROJECT_NAME: str = "Branch Manager API"
    API_V1_PREFIX: str = "/api/v1"

    # CORS
    CORS_ORIGINS: Union[str, List[str]] = Field(default_factory=list)

    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app.log"
    LOG_DIR: str = "logs"
    LOG_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5
    # log to stdout only (containers, test runs)
    LOG_TO_FILE: bool = True

    # Database
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_NAME: str = "branches"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10

    # create tables on startup (dev only, alembic handles production)
    AUTO_CREATE_TABLES: bool = False

    # Auth
    SECRET_KEY: str = "fallback-secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    AUTH_COOKIE_NAME: str = "auth-token"
    COOKIE_SECURE: bool = False

    # Validators

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """
        Convert comma-separated string to list[str]
        """
        if isinstance(v, str):
            v = v.strip('"').strip("'")
            return [x.strip() for x in v.split(",") if x.strip()]
        elif isinstance(v, list):
            return v
        return []

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def build_database_url(cls, v, info):
        if v:
            return v
        data = info.data
        return f"postgresql+psycopg2://{data['DB_USER']}:{data['DB_PASSWORD']}@{data['DB_HOST']}:{data['DB_PORT']}/{data['DB_NAME']}"

    # Properties
    @property
    def is_postgresql(self) -> bool:
        return self.DATABASE_URL.startswith("postgresql")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def access_token_max_age(self) -> int:
        """Cookie max-age in seconds, aligned with the token expiry"""
        return self.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60

    # Config
    model_config = SettingsConfigDict(
        env_file="env/.env.local",
        case_sensitive=True,
        extra="ignore"
    )


# Global instance
settings = Settings()
