"""Tests for eventblock package structure and imports."""

from __future__ import annotations

import os
import re
import subprocess
import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[2] / "src"


def test_package_is_importable() -> None:
    import eventblock  # noqa: F401


def test_package_version_is_semver() -> None:
    import eventblock

    assert re.match(r"^\d+\.\d+\.\d+$", eventblock.__version__)


def test_public_api_exported() -> None:
    """Everything listed in ``__all__`` resolves."""
    import eventblock

    for name in eventblock.__all__:
        assert hasattr(eventblock, name), name


def test_main_module_help() -> None:
    """``python -m eventblock --help`` runs and exits cleanly."""
    result = subprocess.run(
        [sys.executable, "-m", "eventblock", "--help"],
        capture_output=True,
        text=True,
        timeout=10,
        env={**os.environ, "PYTHONPATH": str(_SRC)},
    )
    assert result.returncode == 0
    assert "usage" in result.stdout.lower()
    assert "Traceback" not in result.stderr
