"""Pydantic models for parsed calendar events.

Defines the value types produced by the event extractor:

- :class:`CalendarEvent` -- a single event with opaque time strings.
- :class:`EventExtractionResult` -- an ordered list of events plus a count
  that is always derived from the list itself.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


def single_line(value: str) -> str:
    """Return *value* trimmed, with its line breaks folded into single spaces."""
    return " ".join(part.strip() for part in value.splitlines() if part.strip())


# ---------------------------------------------------------------------------
# CalendarEvent
# ---------------------------------------------------------------------------


class CalendarEvent(BaseModel):
    """A single calendar event recovered from the generator's output.

    Times are kept as the strings the generator produced
    (``"YYYY-MM-DD HH:MM[:SS]"``); they are not parsed here.  Every text
    value is trimmed and held on a single line, matching what one labeled
    line of an ``event-N`` block can carry.

    Attributes:
        title: Short event title.  Never blank.
        start_time: Event start, wire name ``startTime``.  Never blank.
        end_time: Event end, wire name ``endTime``.  Never blank.
        location: Event location, or ``None`` if not given.
        notes: Free-text notes, or ``None``.
        reminder: Reminder description, or ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    location: str | None = None
    notes: str | None = None
    reminder: str | None = None

    @field_validator("title", "start_time", "end_time", "location", "notes", "reminder")
    @classmethod
    def _fold_lines(cls, value: str | None) -> str | None:
        """Trim each value and fold any line breaks into single spaces."""
        if value is None:
            return None
        return single_line(value)

    @field_validator("title", "start_time", "end_time")
    @classmethod
    def _require_non_blank(cls, value: str) -> str:
        """Reject blank required fields so partial events never exist."""
        if not value.strip():
            raise ValueError("must not be blank")
        return value


# ---------------------------------------------------------------------------
# EventExtractionResult
# ---------------------------------------------------------------------------


class EventExtractionResult(BaseModel):
    """Ordered events extracted from one response.

    ``event_count`` is computed from ``events``.  A count supplied by the
    generator (``eventCount`` in its JSON) is ignored on input, so the two
    can never disagree.

    Attributes:
        events: Extracted events in source order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    events: tuple[CalendarEvent, ...] = ()

    @computed_field(alias="eventCount")  # type: ignore[prop-decorator]
    @property
    def event_count(self) -> int:
        """Number of events, always ``len(events)``."""
        return len(self.events)

    @classmethod
    def empty(cls) -> EventExtractionResult:
        """Return the canonical empty result."""
        return cls(events=())
