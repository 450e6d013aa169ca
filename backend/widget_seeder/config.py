from pydantic import BaseModel, Field
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


_ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(_ROOT_DIR / ".env")
load_dotenv()  # fallback to current working directory


def _normalize_env(value: Optional[str], default: str) -> str:
    if value is None:
        return default
    cleaned = value.strip().lower()
    return cleaned or default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


class Settings(BaseModel):
    app_name: str = "MPFM Widget Seeder"
    database_url: str = Field(default_factory=lambda: _env_str("DATABASE_URL", "sqlite:///./data.db"))
    debug: bool = Field(default_factory=lambda: _env_bool("DEBUG", False))
    environment: str = Field(
        default_factory=lambda: _normalize_env(os.getenv("APP_ENV") or os.getenv("ENVIRONMENT"), "dev")
    )
    admin_email: str = Field(default_factory=lambda: _env_str("SEED_ADMIN_EMAIL", "admin@saherflow.com"))
    device_type_name: str = Field(default_factory=lambda: _env_str("SEED_DEVICE_TYPE", "MPFM"))
    log_level: str = Field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO").upper())

    @property
    def is_production(self) -> bool:
        return self.environment in {"prod", "production"}


settings = Settings()
