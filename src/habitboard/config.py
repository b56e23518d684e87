"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from tzlocal import get_localzone

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitBoard"
    DB_FILENAME = "habitboard.db"
    WIDGET_FILENAME = "habits.json"
    SUPPORTED_LOCALES = ("es", "en")

    def __init__(self, data_dir: Path | None = None) -> None:
        self.DEV_MODE = _env_bool("HABITBOARD_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DATABASE_URL = os.getenv("HABITBOARD_DATABASE_URL", self._build_sqlite_url())
        self.SUPABASE_URL = os.getenv("HABITBOARD_SUPABASE_URL", "").rstrip("/")
        self.SUPABASE_ANON_KEY = os.getenv("HABITBOARD_SUPABASE_ANON_KEY", "")
        self.HTTP_TIMEOUT = _env_float("HABITBOARD_HTTP_TIMEOUT", 10.0)
        self.LOCALE = os.getenv("HABITBOARD_LOCALE", "es").strip().lower() or "es"
        self.TIMEZONE = os.getenv("HABITBOARD_TIMEZONE", "").strip() or None
        self.WEEK_START = _env_int("HABITBOARD_WEEK_START", 0)
        self.WIDGET_PATH = Path(
            os.getenv("HABITBOARD_WIDGET_PATH", str(self.DATA_DIR / "widget" / self.WIDGET_FILENAME))
        ).expanduser()

        if self.LOCALE not in self.SUPPORTED_LOCALES:
            raise ValueError(
                f"HABITBOARD_LOCALE must be one of {', '.join(self.SUPPORTED_LOCALES)}"
            )
        if not 0 <= self.WEEK_START <= 6:
            raise ValueError("HABITBOARD_WEEK_START must be between 0 (Monday) and 6 (Sunday)")

    def _resolve_data_dir(self, override: Path | None = None) -> Path:
        """Return the directory where the cache database, logs and exports live."""

        data_root = override or os.getenv("HABITBOARD_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}

    def timezone(self) -> tzinfo:
        """Return the configured zone, falling back to the system's named local zone."""

        if not self.TIMEZONE:
            return get_localzone()
        try:
            return ZoneInfo(self.TIMEZONE)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown HABITBOARD_TIMEZONE: {self.TIMEZONE}") from exc

    def now(self) -> datetime:
        """Current wall-clock time as an aware datetime in the configured zone."""

        return datetime.now(self.timezone())

    def require_remote(self) -> None:
        """Raise when the backend credentials are not configured."""

        if not self.SUPABASE_URL or not self.SUPABASE_ANON_KEY:
            raise ValueError(
                "HABITBOARD_SUPABASE_URL and HABITBOARD_SUPABASE_ANON_KEY must be set "
                "to talk to the backend."
            )


class DevConfig(BaseConfig):
    """Development configuration using the local SQLite cache."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite (in-memory cache, fixed zone)."""

    __test__ = False
    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | None = None) -> None:
        super().__init__(data_dir)
        self.DEV_MODE = True
        self.DATABASE_URL = "sqlite://"
        self.TIMEZONE = "Europe/Madrid"
