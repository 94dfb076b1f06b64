"""
Application settings loaded from environment variables.

- ALLOWED_HOST: only requests whose Host header equals this value are served (empty disables the check)
- API_HOST / PORT: listener address and port (PORT accepts "8000" or ":8000")
- DOCS_URL: target of the redirect served at "/"
- HEALTH_CHECK_TIMEOUT_SEC: upper bound for the storage probe in /healthz
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_CONFIG_DIR = Path(__file__).resolve().parent
_ROOT = _CONFIG_DIR.parent.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_DOCS_URL = "https://docs.minhareceita.org"
DEFAULT_HEALTH_CHECK_TIMEOUT_SEC = 2.0


def load_registry_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def normalize_port(raw: str | int | None) -> int:
    """Return the port as int; accepts 8000, "8000" and ":8000"."""
    if raw is None:
        return DEFAULT_PORT
    if isinstance(raw, int):
        return raw
    value = raw.strip().lstrip(":")
    if not value:
        return DEFAULT_PORT
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid port: {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API server."""

    allowed_host: str = ""
    api_host: str = DEFAULT_API_HOST
    port: int = DEFAULT_PORT
    docs_url: str = DEFAULT_DOCS_URL
    health_check_timeout_sec: float = DEFAULT_HEALTH_CHECK_TIMEOUT_SEC


def get_settings() -> Settings:
    """Build Settings from the environment (after loading .env)."""
    load_registry_env()
    timeout_raw = (os.getenv("HEALTH_CHECK_TIMEOUT_SEC") or "").strip()
    return Settings(
        allowed_host=(os.getenv("ALLOWED_HOST") or "").strip(),
        api_host=(os.getenv("API_HOST") or DEFAULT_API_HOST).strip() or DEFAULT_API_HOST,
        port=normalize_port(os.getenv("PORT")),
        docs_url=(os.getenv("DOCS_URL") or DEFAULT_DOCS_URL).strip() or DEFAULT_DOCS_URL,
        health_check_timeout_sec=float(timeout_raw) if timeout_raw else DEFAULT_HEALTH_CHECK_TIMEOUT_SEC,
    )
