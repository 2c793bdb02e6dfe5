from pydantic import BaseModel, Field
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


_ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(_ROOT_DIR / ".env")
load_dotenv()  # fallback to current working directory


def _optional_env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


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


class ProbeSettings(BaseModel):
    attempts: int = 3
    timeout_seconds: float = 15.0
    retry_delay_seconds: float = 3.0


def _load_probe_settings() -> ProbeSettings:
    return ProbeSettings(
        attempts=_env_int("SEED_PROBE_ATTEMPTS", 3),
        timeout_seconds=_env_float("SEED_PROBE_TIMEOUT_SECONDS", 15.0),
        retry_delay_seconds=_env_float("SEED_PROBE_RETRY_DELAY_SECONDS", 3.0),
    )


class Settings(BaseModel):
    app_name: str = "Dashboard Seed"
    postgres_url: Optional[str] = _optional_env("POSTGRES_URL")
    ssl_mode: str = os.getenv("POSTGRES_SSLMODE", "require")
    connect_timeout_seconds: int = _env_int("POSTGRES_CONNECT_TIMEOUT", 60)
    application_name: str = os.getenv("POSTGRES_APPLICATION_NAME", "nextjs-dashboard-seed")
    password_hash_rounds: int = _env_int("PASSWORD_HASH_ROUNDS", 10)
    dashboard_path: str = os.getenv("DASHBOARD_PATH", "/dashboard")
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = _env_int("PORT", 8000)
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    debug: bool = _env_bool("DEBUG", False)
    probe: ProbeSettings = Field(default_factory=_load_probe_settings)

    @property
    def is_configured(self) -> bool:
        return bool(self.postgres_url and self.postgres_url.strip())


settings = Settings()


def get_settings() -> Settings:
    return settings
