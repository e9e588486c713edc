"""Prompt builders for the event-extraction request.

Both builders are pure: the same input text, reference date and timezone
always produce the same prompt.  The generator resolves relative dates
("this friday", "tomorrow") itself, so the prompt carries the reference
date and timezone it needs to do that.
"""

from __future__ import annotations

from datetime import date


def build_event_prompt(user_text: str, reference_date: date, timezone: str) -> str:
    """Build the prompt that asks for labeled ``event-N`` blocks.

    The output format embedded here is the one read back by
    :func:`~eventblock.extraction.parse_text_block` and written by
    :func:`~eventblock.formatter.format_event_block`.

    Args:
        user_text: The user's free-form message.
        reference_date: Date that relative references are resolved
            against, usually "today" in *timezone*.
        timezone: IANA timezone name (e.g. ``"Europe/Berlin"``).

    Returns:
        The complete prompt string, ending with the user's message.
    """
    return f"""\
You are an event parser. From the given input, extract zero or more events. If there are no events, return nothing.
Irrelevant, non-event-related, or insufficiently detailed input should also return nothing.
If there is one or more events, output them in the exact format below with sequential numbering starting at event-1.
Do not add any extra text, explanations, or commentary.

REFERENCE_DATE: {reference_date.isoformat()}
TIMEZONE: {timezone}
OUTPUT FORMAT (exactly, no extra text):
event-1
title: <title>
start: <YYYY-MM-DD HH:MM:SS>
end: <YYYY-MM-DD HH:MM:SS>
location: <location or empty>
notes: <notes or empty>
event-2
title: <title>
start: <YYYY-MM-DD HH:MM:SS>
end: <YYYY-MM-DD HH:MM:SS>
location: <location or empty>
notes: <notes or empty>
...

Input: {user_text}"""


def build_json_prompt(user_text: str, reference_date: date, timezone: str) -> str:
    """Build the prompt that asks for a single JSON object.

    Same inputs as :func:`build_event_prompt`.  The requested shape is the
    ``{"eventCount": ..., "events": [...]}`` object accepted by the JSON
    strategies of :func:`~eventblock.extraction.parse_event_text`.
    """
    return f"""\
You are an AI assistant that extracts calendar events from text.
Extract all calendar events from the following text and format them as a JSON object.

REFERENCE_DATE: {reference_date.isoformat()}
TIMEZONE: {timezone}

Format the response as follows:
{{
  "eventCount": number of events found,
  "events": [
    {{
      "title": "event title",
      "startTime": "YYYY-MM-DD HH:MM",
      "endTime": "YYYY-MM-DD HH:MM",
      "location": "location if specified",
      "notes": "any notes or details",
      "reminder": "reminder time if specified"
    }}
  ]
}}

If no events are found, return {{"eventCount": 0, "events": []}}.
Only include fields that are specified in the text.
Do not include any explanations, just the JSON object.

Text: {user_text}"""
