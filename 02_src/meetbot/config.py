"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "meetbot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_MODEL = "claude-sonnet-4-5"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _list_env(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime settings, read from the environment."""

    timezone: str = DEFAULT_TIMEZONE
    anthropic_api_key: str | None = None
    anthropic_model: str = DEFAULT_MODEL
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = "http://localhost:8000/auth/google/callback"
    bitly_access_token: str | None = None
    extractor_timeout: float = 30.0  # seconds
    resolver_timeout: float = 5.0
    scheduling_timeout: float = 30.0
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:5173"]
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            timezone=os.getenv("APP_TIMEZONE", DEFAULT_TIMEZONE),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            anthropic_model=os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
            google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET", ""),
            google_redirect_uri=os.getenv(
                "GOOGLE_REDIRECT_URI",
                "http://localhost:8000/auth/google/callback",
            ),
            bitly_access_token=os.getenv("BITLY_ACCESS_TOKEN") or None,
            extractor_timeout=_float_env("EXTRACTOR_TIMEOUT", 30.0),
            resolver_timeout=_float_env("RESOLVER_TIMEOUT", 5.0),
            scheduling_timeout=_float_env("SCHEDULING_TIMEOUT", 30.0),
            cors_origins=_list_env("CORS_ORIGINS", ["http://localhost:5173"]),
        )
