"""Decide whether a generator response carries event data.

Two independent rules are applied to the whole response text:

1. It holds a JSON object with both an ``eventCount`` and an ``events``
   key.  The object is the span from the first ``{`` to the last ``}``,
   which for a bare object is the whole trimmed text.
2. It contains a labeled block marker, ``event-<digits>`` followed by
   whitespace and a ``title:`` label.

Text that satisfies neither rule is a conversational reply and is shown
as-is, even if it happens to describe events in some other shape.
"""

from __future__ import annotations

import re

from eventblock.extraction import EMBEDDED_JSON_RE, load_json_object

EVENT_BLOCK_RE = re.compile(r"event-\d+\s+title:")

_JSON_KEYS = ("eventCount", "events")


def is_event_bearing(text: str) -> bool:
    """Return ``True`` if *text* looks like event data.

    Args:
        text: The complete aggregated response text.

    Returns:
        Whether either the structural JSON rule or the text-block rule
        matches.
    """
    return _matches_json_shape(text) or EVENT_BLOCK_RE.search(text) is not None


def _matches_json_shape(text: str) -> bool:
    """Structural rule: key presence only, values are not checked."""
    match = EMBEDDED_JSON_RE.search(text)
    if match is None:
        return False
    data = load_json_object(match.group(0))
    if data is None:
        return False
    return all(key in data for key in _JSON_KEYS)
