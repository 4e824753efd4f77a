# File: employee_records/core/config.py

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator  # BaseSettings not needed

load_dotenv()


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Employee Records API")
    VERSION: str = "0.1.0"

    # "development" adds stack traces to error envelopes
    environment: str = os.getenv("ENVIRONMENT", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    backend_cors_origins: List[str] = Field(
        default_factory=lambda: os.getenv(
            "BACKEND_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        ),
        validate_default=True,
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./employees.db")

    # Security / auth
    jwt_secret: str = os.getenv("JWT_SECRET", "CHANGE_ME_IN_PRODUCTION")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))  # 1h

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
