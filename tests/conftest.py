"""Shared fixtures for eventblock tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator

import pytest

_ENV_VARS = (
    "LLAMA_BASE_URL",
    "LLAMA_MODEL",
    "TIMEZONE",
    "LOG_LEVEL",
    "REQUEST_TIMEOUT",
)


def _ndjson_lines(*chunks: str, done_on_last: bool = True) -> list[str]:
    """Build generator stream lines, one envelope per chunk.

    The last chunk carries ``done: true`` unless *done_on_last* is false.
    """
    lines = []
    for index, chunk in enumerate(chunks):
        done = done_on_last and index == len(chunks) - 1
        lines.append(
            json.dumps(
                {
                    "model": "llama2",
                    "created_at": "2025-08-18T09:00:00Z",
                    "response": chunk,
                    "done": done,
                }
            )
        )
    return lines


@pytest.fixture()
def ndjson() -> Callable[..., list[str]]:
    """Return the NDJSON line builder."""
    return _ndjson_lines


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all eventblock-related environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("eventblock.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def monkeypatch_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set every environment variable to a valid, non-default value.

    Returns the dict of variables so tests can inspect or override values.
    """
    env_vars = {
        "LLAMA_BASE_URL": "http://llama.test:11434/api",
        "LLAMA_MODEL": "llama3",
        "TIMEZONE": "Europe/Berlin",
        "LOG_LEVEL": "WARNING",
        "REQUEST_TIMEOUT": "30",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
