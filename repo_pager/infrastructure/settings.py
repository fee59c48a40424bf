"""Runtime configuration read from environment variables."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from repo_pager.domain.fetcher_interface import DEFAULT_PAGE_SIZE


DEFAULT_API_URL = "https://api.github.com"
MAX_PAGE_SIZE = 100  # GitHub max per_page


@dataclass(frozen=True)
class Settings:
    """Configuration for the GitHub client and the entry scripts."""
    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: float = 20.0
    log_level: str = "INFO"


def _get_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _get_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``

    Returns:
        Settings with defaults applied for unset variables

    Raises:
        ValueError: When a numeric variable cannot be parsed
    """
    if environ is None:
        environ = os.environ

    api_url = (environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
    token = (environ.get("GITHUB_TOKEN") or "").strip() or None
    page_size = _get_int(environ, "PAGE_SIZE", DEFAULT_PAGE_SIZE)
    page_size = max(1, min(page_size, MAX_PAGE_SIZE))
    request_timeout = _get_float(environ, "REQUEST_TIMEOUT", 20.0)
    log_level = (environ.get("LOG_LEVEL") or "INFO").strip().upper()

    return Settings(
        api_url=api_url,
        token=token,
        page_size=page_size,
        request_timeout=request_timeout,
        log_level=log_level
    )
