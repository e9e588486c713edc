"""eventblock: calendar events from streamed LLM output.

Sends free-form text to a streaming text-generation backend, reassembles
the NDJSON response, and extracts calendar events from it whether the
model answered with JSON, JSON wrapped in prose, or labeled ``event-N``
blocks.
"""

from __future__ import annotations

from eventblock.classifier import is_event_bearing
from eventblock.exceptions import EventBlockError, StreamCancelledError, TransportError
from eventblock.extraction import parse_event_text, parse_text_block
from eventblock.formatter import NO_EVENTS_FOUND, format_event_block
from eventblock.models.events import CalendarEvent, EventExtractionResult
from eventblock.models.stream import GenerateRequest, ResponseFragment
from eventblock.prompts import build_event_prompt, build_json_prompt
from eventblock.streaming import ResponseAggregator, aggregate_stream, decode_line, iter_fragments

__version__ = "0.1.0"

__all__ = [
    "NO_EVENTS_FOUND",
    "CalendarEvent",
    "EventBlockError",
    "EventExtractionResult",
    "GenerateRequest",
    "ResponseAggregator",
    "ResponseFragment",
    "StreamCancelledError",
    "TransportError",
    "aggregate_stream",
    "build_event_prompt",
    "build_json_prompt",
    "decode_line",
    "format_event_block",
    "is_event_bearing",
    "iter_fragments",
    "parse_event_text",
    "parse_text_block",
]
