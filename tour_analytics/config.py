"""Configuration utilities for environment-based settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env(dotenv_path: Optional[str] = None) -> None:
    """Load environment variables from a .env file without overriding existing values."""
    path = Path(dotenv_path or ".env")
    load_dotenv(dotenv_path=str(path), override=False)


# 默认HTTP超时时间（秒）
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_REFRESH_INTERVAL = 30.0
DEFAULT_PAGE_LIMIT = 1000
DEFAULT_API_BASE_URL = "http://localhost:5000/api"


@dataclass(frozen=True)
class CompanyInfo:
    """Agency details printed on generated documents."""

    name: str = "Pather Khonje"
    tagline: str = "A tour that never seen before."
    address: str = "64/2/12, Biren Roy Road (East),\nBehala Chowrasta, Kolkata - 700008"
    email: str = "contact@patherkhonje.com"
    website: str = "www.patherkhonje.com"
    phone: str = "+91 7439857694"


@dataclass(frozen=True)
class Settings:
    """Structured configuration values for the travel REST API and analytics."""

    api_base_url: str
    api_token: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    real_time_updates: bool = True
    page_limit: int = DEFAULT_PAGE_LIMIT
    company: CompanyInfo = CompanyInfo()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_token)


def _positive_float(raw: str, default: float) -> float:
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _positive_int(raw: str, default: int) -> int:
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _flag(raw: str, default: bool) -> bool:
    if not raw:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def get_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Return cached settings, ensuring environment variables are loaded once."""
    load_env(dotenv_path)
    defaults = CompanyInfo()
    company = CompanyInfo(
        name=os.getenv("COMPANY_NAME", defaults.name),
        tagline=os.getenv("COMPANY_TAGLINE", defaults.tagline),
        address=os.getenv("COMPANY_ADDRESS", defaults.address),
        email=os.getenv("COMPANY_EMAIL", defaults.email),
        website=os.getenv("COMPANY_WEBSITE", defaults.website),
        phone=os.getenv("COMPANY_PHONE", defaults.phone),
    )
    return Settings(
        api_base_url=os.getenv("TRAVEL_API_BASE_URL", DEFAULT_API_BASE_URL),
        api_token=os.getenv("TRAVEL_API_TOKEN", ""),
        http_timeout=_positive_float(
            os.getenv("TRAVEL_API_HTTP_TIMEOUT", ""), DEFAULT_HTTP_TIMEOUT
        ),
        refresh_interval=_positive_float(
            os.getenv("ANALYTICS_REFRESH_INTERVAL", ""), DEFAULT_REFRESH_INTERVAL
        ),
        real_time_updates=_flag(os.getenv("ANALYTICS_REAL_TIME_UPDATES", ""), True),
        page_limit=_positive_int(os.getenv("TRAVEL_API_PAGE_LIMIT", ""), DEFAULT_PAGE_LIMIT),
        company=company,
    )
