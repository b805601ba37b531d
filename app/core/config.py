from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    # API Settings
    PROJECT_NAME: str = "Retail Admin API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Database Settings
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./retail.db"
    DATABASE_ECHO: bool = False

    # JWT Settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str] | str:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Redis Settings
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    CACHE_ENABLED: bool = False
    CATEGORY_TREE_CACHE_TTL: int = 300

    # Logging
    LOG_LEVEL: str = "INFO"

    # Seed admin
    FIRST_ADMIN_EMAIL: str = "admin@example.com"
    FIRST_ADMIN_PASSWORD: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """Get full database URL."""
        return self.SQLALCHEMY_DATABASE_URI

    @property
    def REDIS_URL(self) -> str:
        """Get full Redis URL."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}"

    class Config:
        case_sensitive = True
        env_file = ".env"

settings = Settings()
