"""Format-dispatching parser for event-bearing responses.

The generator is asked for a labeled text block but regularly answers with
JSON instead, sometimes wrapped in prose.  :func:`parse_event_text` tries
an ordered list of strategies and returns the result of the first one that
recognises the text:

1. :func:`_parse_direct_json` -- the whole trimmed text is a JSON object.
2. :func:`_parse_embedded_json` -- the span from the first ``{`` to the
   last ``}`` is a JSON object.
3. :func:`parse_text_block` -- ``event-N`` segments with ``title:`` /
   ``start:`` / ``end:`` ... labels.

A strategy signals "not my format" by returning ``None``.  Nothing raised
while decoding escapes this module; the worst outcome is the empty result.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from eventblock.models.events import CalendarEvent, EventExtractionResult

logger = logging.getLogger(__name__)

# Start of every labeled event segment.  Only matches at the start of a line.
EVENT_MARKER_RE = re.compile(r"^[ \t]*event-\d+", re.MULTILINE)

# Greedy: first "{" through last "}" anywhere in the text.
EMBEDDED_JSON_RE = re.compile(r"\{[\s\S]*\}")

# Block label -> CalendarEvent field.  Prefixes are case-sensitive.
_BLOCK_LABELS: dict[str, str] = {
    "title:": "title",
    "start:": "start_time",
    "end:": "end_time",
    "location:": "location",
    "notes:": "notes",
    "reminder:": "reminder",
}

_REQUIRED_FIELDS = ("title", "start_time", "end_time")

Strategy = Callable[[str], EventExtractionResult | None]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_event_text(text: str) -> EventExtractionResult:
    """Extract calendar events from a response classified as event data.

    Args:
        text: The aggregated generator response.

    Returns:
        The first successful strategy's result, or the empty result when
        no strategy recognises the text.  Never raises.
    """
    for strategy in _STRATEGIES:
        result = strategy(text)
        if result is None:
            logger.debug("Strategy %s did not match", strategy.__name__)
            continue
        logger.info(
            "Parsed %d event(s) via %s", result.event_count, strategy.__name__
        )
        return result

    logger.info("No parseable events in response (%d characters)", len(text))
    return EventExtractionResult.empty()


def parse_text_block(text: str) -> EventExtractionResult | None:
    """Parse the labeled ``event-N`` block format.

    Each segment starts at a line beginning with ``event-<digits>`` and
    runs up to the next such line; text before the first marker is
    ignored.  An ``event-<digits>`` in the middle of a line is plain text.
    Within a segment, lines starting with a known label set the matching
    field (a repeated label overwrites the earlier value).  Segments
    without a non-blank title, start and end are dropped.

    Args:
        text: Text containing zero or more labeled event segments.

    Returns:
        A result with the recovered events, or ``None`` if no segment
        produced a complete event.
    """
    events: list[CalendarEvent] = []

    for segment in _split_segments(text):
        fields: dict[str, str] = {}
        for raw_line in segment.splitlines():
            line = raw_line.strip()
            for label, field_name in _BLOCK_LABELS.items():
                if line.startswith(label):
                    fields[field_name] = line[len(label):].strip()
                    break

        if not all(fields.get(name, "").strip() for name in _REQUIRED_FIELDS):
            logger.debug("Dropping incomplete event segment: %r", segment[:80])
            continue

        event = _event_from_mapping(fields)
        if event is None:
            continue
        events.append(event)

    if not events:
        return None
    return EventExtractionResult(events=tuple(events))


def load_json_object(text: str) -> dict[str, Any] | None:
    """Decode *text* as a JSON object, or return ``None``.

    Shared by the classifier and the JSON strategies so that decode
    failures are handled in exactly one place.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    return data


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def _parse_direct_json(text: str) -> EventExtractionResult | None:
    """Whole trimmed text is the result object."""
    trimmed = text.strip()
    if not (trimmed.startswith("{") and trimmed.endswith("}")):
        return None
    return _result_from_json(trimmed)


def _parse_embedded_json(text: str) -> EventExtractionResult | None:
    """Result object surrounded by prose or code fences."""
    match = EMBEDDED_JSON_RE.search(text)
    if match is None:
        return None
    return _result_from_json(match.group(0))


_STRATEGIES: tuple[Strategy, ...] = (
    _parse_direct_json,
    _parse_embedded_json,
    parse_text_block,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _result_from_json(candidate: str) -> EventExtractionResult | None:
    """Build a result from a JSON object string with an ``events`` list.

    The object's own ``eventCount`` is never read.  Entries that are not
    objects or are not valid events are skipped one by one.
    """
    data = load_json_object(candidate)
    if data is None:
        return None

    raw_events = data.get("events")
    if not isinstance(raw_events, list):
        return None

    events: list[CalendarEvent] = []
    for index, raw_event in enumerate(raw_events):
        if not isinstance(raw_event, Mapping):
            logger.debug("Skipping non-object event at index %d", index)
            continue
        event = _event_from_mapping(raw_event)
        if event is None:
            logger.debug("Skipping invalid event at index %d", index)
            continue
        events.append(event)

    return EventExtractionResult(events=tuple(events))


def _event_from_mapping(data: Mapping[str, Any]) -> CalendarEvent | None:
    """Validate *data* into a :class:`CalendarEvent`, or return ``None``."""
    try:
        return CalendarEvent.model_validate(dict(data))
    except ValidationError:
        return None


def _split_segments(text: str) -> list[str]:
    """Split *text* at each event marker, dropping any leading preamble."""
    starts = [match.start() for match in EVENT_MARKER_RE.finditer(text)]
    return [
        text[start:end]
        for start, end in zip(starts, [*starts[1:], len(text)])
    ]
