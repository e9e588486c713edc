"""Render extraction results in the canonical labeled block format.

The same syntax is requested from the generator by
:func:`~eventblock.prompts.build_event_prompt` and read back by
:func:`~eventblock.extraction.parse_text_block`, so formatting a result and
parsing the output again yields an equal result.
"""

from __future__ import annotations

from eventblock.models.events import CalendarEvent, EventExtractionResult, single_line

# User-facing text for an empty result.  Contains no "event-N" marker, so
# it is never mistaken for event data.
NO_EVENTS_FOUND = "No events found"


def format_event_block(result: EventExtractionResult) -> str:
    """Render *result* as ``event-N`` blocks.

    Events are numbered from 1 in list order.  ``location``, ``notes`` and
    ``reminder`` lines appear only when the value is not ``None``.

    Args:
        result: The extraction result to render.

    Returns:
        The block text, or :data:`NO_EVENTS_FOUND` when there are no
        events.
    """
    if result.event_count == 0:
        return NO_EVENTS_FOUND

    lines: list[str] = []
    for number, event in enumerate(result.events, start=1):
        lines.extend(_event_lines(number, event))
    return "\n".join(lines)


def _event_lines(number: int, event: CalendarEvent) -> list[str]:
    # One line per value; a line break would start a new label.
    lines = [
        f"event-{number}",
        f" title: {single_line(event.title)}",
        f" start: {single_line(event.start_time)}",
        f" end: {single_line(event.end_time)}",
    ]
    for label, value in (
        ("location", event.location),
        ("notes", event.notes),
        ("reminder", event.reminder),
    ):
        if value is not None:
            lines.append(f" {label}: {single_line(value)}")
    return lines
