"""Configuration loading for eventblock.

Reads settings from environment variables (with .env support via
python-dotenv).  Every setting has a default; invalid values are reported
together in a single :class:`ConfigError`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://localhost:11434/api/"
DEFAULT_MODEL = "llama2"
DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_REQUEST_TIMEOUT = 120.0


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        base_url: Base URL of the generator API; always ends with ``/``.
        model: Model name sent with every generate request.
        timezone: IANA timezone embedded in prompts and used to compute
            the reference date.
        log_level: Logging level (default ``"INFO"``).
        request_timeout: HTTP timeout in seconds for the generate call.
    """

    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = "INFO"
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Unset or whitespace-only variables fall
    back to their defaults.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If any variable holds an invalid value.  The message
            names **all** offending variables.
    """
    load_dotenv()

    values: dict[str, object] = {}
    invalid: list[str] = []

    base_url = os.environ.get("LLAMA_BASE_URL", "").strip()
    if base_url:
        if not base_url.startswith(("http://", "https://")):
            invalid.append("LLAMA_BASE_URL")
        else:
            values["base_url"] = base_url if base_url.endswith("/") else base_url + "/"

    raw_timeout = os.environ.get("REQUEST_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            timeout = 0.0
        if timeout <= 0:
            invalid.append("REQUEST_TIMEOUT")
        else:
            values["request_timeout"] = timeout

    timezone = os.environ.get("TIMEZONE", "").strip()
    if timezone:
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            invalid.append("TIMEZONE")
        else:
            values["timezone"] = timezone

    if invalid:
        names = ", ".join(invalid)
        raise ConfigError(f"Invalid environment variables: {names}")

    for env_var, field_name in (
        ("LLAMA_MODEL", "model"),
        ("LOG_LEVEL", "log_level"),
    ):
        raw = os.environ.get(env_var, "").strip()
        if raw:
            values[field_name] = raw

    return Settings(**values)  # type: ignore[arg-type]
