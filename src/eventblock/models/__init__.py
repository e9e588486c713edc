"""Data models for eventblock."""

from __future__ import annotations

from eventblock.models.events import CalendarEvent, EventExtractionResult
from eventblock.models.stream import GenerateRequest, ResponseFragment

__all__ = [
    "CalendarEvent",
    "EventExtractionResult",
    "GenerateRequest",
    "ResponseFragment",
]
