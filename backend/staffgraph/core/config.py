# backend/staffgraph/core/config.py

import json
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Employee Management System API"
    ENV: str = "dev"

    DATABASE_URL: str = "sqlite:///./employees.db"

    # one secret for issuing AND verifying tokens
    JWT_SECRET_KEY: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # comma-separated allowlist or a JSON list
    # Example: CORS_ORIGINS="https://ems.example.com,http://localhost:5173"
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    GRAPHQL_INTROSPECTION: bool = True

    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        s = (self.CORS_ORIGINS or "").strip()
        if not s:
            return []
        if s.startswith("["):
            return [str(o).strip() for o in json.loads(s) if str(o).strip()]
        return [o.strip() for o in s.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
