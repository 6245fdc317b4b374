from __future__ import annotations

import json
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


EnvType = Literal["local", "dev", "staging", "prod"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_NAME: str = "MockDraftAPI"
    APP_ENV: EnvType = "local"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = Field(default=8000, ge=1, le=65535)

    # CORS
    CORS_ORIGINS: str | List[str] = Field(
        default='["http://localhost:5173","http://127.0.0.1:5173"]',
        description='JSON list or comma-separated origins',
    )

    # DB
    DATABASE_URL: Optional[str] = None

    # Draft engine
    ENFORCE_TURN_ORDER: bool = Field(
        default=False,
        description="Reject picks made by a team that is not on the clock",
    )
    UNTIERED_TIER: int = Field(default=999, ge=1, description="Tier assumed for players without one")

    @property
    def IS_LOCAL(self) -> bool:
        return self.APP_ENV == "local"

    # ---------- Validators ----------

    @field_validator("CORS_ORIGINS")
    @classmethod
    def _parse_cors(cls, v):
        # Accept JSON list or comma-separated string
        if isinstance(v, list):
            return v
        s = str(v).strip()
        if not s:
            return []
        try:
            parsed = json.loads(s)
            if isinstance(parsed, list):
                return parsed
        except ValueError:
            pass
        # fallback: comma-separated
        return [p.strip() for p in s.split(",") if p.strip()]

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    # ---------- Runtime validations ----------

    def validate_at_startup(self) -> None:
        """Fail fast with clear messages for misconfigurations."""
        problems: list[str] = []

        # SQLite fallback is fine locally; hosted envs need a real database
        if not self.IS_LOCAL and not self.DATABASE_URL:
            problems.append("DATABASE_URL is required in non-local env.")

        # CORS must not be empty outside local
        if not self.IS_LOCAL and not self.CORS_ORIGINS:
            problems.append("CORS_ORIGINS must contain at least one allowed origin in non-local env.")

        if problems:
            raise RuntimeError("Config validation failed: " + " ".join(problems))


settings = Settings()
