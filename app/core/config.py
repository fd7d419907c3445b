# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for various aspects of the application:
# API configuration (version, project name)
# Server settings (base URL, port)
# Database connection details (full URL or discrete Postgres parts)
# Request dispatch tuning


import json
from typing import Annotated, List, Optional, Union

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

load_dotenv()

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API configuration
    PROJECT_NAME: str = "Posts API"
    VERSION: str = "0.1.0"

    # Server
    BASE_URL: str = "http://localhost:4444"
    PORT: int = 4444

    # Database - DATABASE_URL is set on hosted environments (e.g. Heroku) and wins
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB_NAME: str = "postgres"
    POSTGRES_DB_HOST: str = "localhost"
    POSTGRES_SCHEMA: str = "public"

    # Seconds between checks for a client that went away mid-request
    DISCONNECT_POLL_INTERVAL: float = 0.1

    # Comma separated or a JSON list
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Development settings - set these differently in production
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_database_url(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        # SQLAlchemy no longer accepts the "postgres" scheme Heroku hands out
        if v.startswith("postgres://"):
            return "postgresql://" + v[len("postgres://"):]
        return v

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_DB_HOST}/{self.POSTGRES_DB_NAME}"
        )

# Create settings instance
settings = Settings()
