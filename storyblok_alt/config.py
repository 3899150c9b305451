"""Configuration objects and constants for the alt-text backfill."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

# Australian region of the management API.
DEFAULT_API_URL = "https://api-ap.storyblok.com/v1"
PAGE_SIZE = 100
ITEM_DELAY_SECONDS = 0.8
RETRY_DELAY_SECONDS = 1.0
MAX_RETRIES = 3
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class AltTextConfig:
    """Settings for a single backfill run, resolved once at startup."""

    token: str
    space_id: str
    assets_limit: Optional[int] = None
    dry_run: bool = False
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    report_dir: Path = Path(".")


def _parse_limit(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        limit = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"ASSETS_LIMIT must be an integer, got {raw!r}") from exc
    if limit < 0:
        raise ConfigError(f"ASSETS_LIMIT must not be negative, got {limit}")
    # 0 keeps the historical meaning of "no limit".
    return limit or None


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"STORYBLOK_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"STORYBLOK_TIMEOUT must be positive, got {timeout}")
    return timeout


def parse_bool(raw: Optional[str]) -> bool:
    """Interpret an environment flag such as ``DRY_RUN``."""
    return (raw or "").strip().lower() in _TRUTHY


def load_config(
    env: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> AltTextConfig:
    """Build an :class:`AltTextConfig` from the environment.

    When ``env`` is omitted the process environment is used, after seeding it
    from ``env_file`` (or a ``.env`` in the working directory) via python-dotenv.
    Variables already present in the environment win over the file.
    """
    if env is None:
        if env_file is not None:
            if not env_file.exists():
                raise ConfigError(f"Env file not found: {env_file}")
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    token = (env.get("STORYBLOK_TOKEN") or "").strip()
    space_id = (env.get("SPACE_ID") or "").strip()
    missing = [
        name
        for name, value in (("STORYBLOK_TOKEN", token), ("SPACE_ID", space_id))
        if not value
    ]
    if missing:
        raise ConfigError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )

    api_url = (env.get("STORYBLOK_API_URL") or DEFAULT_API_URL).strip().rstrip("/")
    report_dir = Path(env.get("REPORT_DIR") or ".").expanduser()

    return AltTextConfig(
        token=token,
        space_id=space_id,
        assets_limit=_parse_limit(env.get("ASSETS_LIMIT")),
        dry_run=parse_bool(env.get("DRY_RUN")),
        api_url=api_url,
        timeout=_parse_timeout(env.get("STORYBLOK_TIMEOUT")),
        report_dir=report_dir,
    )
