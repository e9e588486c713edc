"""Unit tests for the prompt builders.

Covers ``build_event_prompt`` and ``build_json_prompt`` from
:mod:`eventblock.prompts`.
"""

from __future__ import annotations

from datetime import date

from eventblock.prompts import build_event_prompt, build_json_prompt

_TEXT = "add prototype review with max this friday at 2 for 45 minutes at factory leipzig"
_DATE = date(2025, 8, 18)
_TZ = "Europe/Berlin"


class TestBuildEventPrompt:
    """The labeled-block prompt."""

    def test_contains_reference_date_and_timezone(self) -> None:
        prompt = build_event_prompt(_TEXT, _DATE, _TZ)

        assert "REFERENCE_DATE: 2025-08-18" in prompt
        assert "TIMEZONE: Europe/Berlin" in prompt

    def test_describes_block_format(self) -> None:
        """The output format matches what the block parser reads."""
        prompt = build_event_prompt(_TEXT, _DATE, _TZ)

        for label in ("event-1", "title:", "start:", "end:", "location:", "notes:"):
            assert label in prompt
        assert "YYYY-MM-DD HH:MM:SS" in prompt

    def test_user_text_comes_last(self) -> None:
        prompt = build_event_prompt(_TEXT, _DATE, _TZ)

        assert prompt.endswith(f"Input: {_TEXT}")

    def test_deterministic(self) -> None:
        assert build_event_prompt(_TEXT, _DATE, _TZ) == build_event_prompt(_TEXT, _DATE, _TZ)

    def test_different_date_changes_prompt(self) -> None:
        assert build_event_prompt(_TEXT, _DATE, _TZ) != build_event_prompt(
            _TEXT, date(2025, 8, 19), _TZ
        )


class TestBuildJsonPrompt:
    """The JSON-object prompt."""

    def test_describes_json_shape(self) -> None:
        prompt = build_json_prompt(_TEXT, _DATE, _TZ)

        assert '"eventCount"' in prompt
        assert '"startTime"' in prompt
        assert '{"eventCount": 0, "events": []}' in prompt

    def test_contains_reference_date_and_text(self) -> None:
        prompt = build_json_prompt(_TEXT, _DATE, _TZ)

        assert "REFERENCE_DATE: 2025-08-18" in prompt
        assert "TIMEZONE: Europe/Berlin" in prompt
        assert prompt.endswith(f"Text: {_TEXT}")
