"""Line decoding and aggregation for the generator's NDJSON stream.

The generator answers with one JSON envelope per line::

    {"model": "llama2", "response": "Sure", "done": false}
    {"model": "llama2", "response": "!", "done": true, "eval_count": 12}

:func:`decode_line` turns a single line into a
:class:`~eventblock.models.stream.ResponseFragment` (or ``None`` to skip
it), :func:`iter_fragments` walks a line source until the final fragment,
and :func:`aggregate_stream` concatenates the fragment text of one request
while reporting read-only snapshots to an optional observer.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator

from pydantic import ValidationError

from eventblock.exceptions import StreamCancelledError
from eventblock.models.stream import ResponseFragment

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line Decoder
# ---------------------------------------------------------------------------


def decode_line(line: str | bytes) -> ResponseFragment | None:
    """Decode one streamed line into a :class:`ResponseFragment`.

    Blank lines, bytes that are not UTF-8, text that is not JSON, and JSON
    that lacks a string ``response`` or a boolean ``done`` all yield
    ``None``.  Upstream generators emit keep-alives and the occasional
    broken line, so none of these are errors.

    Args:
        line: Raw line from the stream source, with or without the
            trailing newline.

    Returns:
        The decoded fragment, or ``None`` when the line should be skipped.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Skipping undecodable stream line: %r", line[:80])
            return None

    if not line.strip():
        return None

    try:
        return ResponseFragment.model_validate_json(line)
    except ValidationError:
        logger.debug("Skipping malformed stream line: %r", line[:80])
        return None


def iter_fragments(lines: Iterable[str | bytes]) -> Iterator[ResponseFragment]:
    """Yield fragments from *lines* until the final one.

    Lines are pulled lazily.  Once a fragment with ``is_final`` set has
    been yielded, no further lines are read.  A source that simply runs
    out without a final fragment is a normal end of stream.
    """
    for line in lines:
        fragment = decode_line(line)
        if fragment is None:
            continue
        yield fragment
        if fragment.is_final:
            return


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class ResponseAggregator:
    """Append-only text buffer for the fragments of a single response.

    Fragments are concatenated verbatim in arrival order.  The current
    value is only ever handed out as an immutable ``str``.
    """

    def __init__(self) -> None:
        self._text = ""
        self._complete = False

    def append(self, fragment: ResponseFragment) -> str:
        """Append *fragment* and return the new snapshot."""
        if self._complete:
            raise RuntimeError("Cannot append to a completed response")
        self._text += fragment.model_text
        if fragment.is_final:
            self._complete = True
        return self._text

    @property
    def snapshot(self) -> str:
        """The text aggregated so far."""
        return self._text

    @property
    def complete(self) -> bool:
        """Whether the final fragment has been appended."""
        return self._complete

    def final_text(self) -> str:
        """Mark the response complete and return its full text."""
        self._complete = True
        return self._text


def aggregate_stream(
    lines: Iterable[str | bytes],
    on_update: Callable[[str], None] | None = None,
    cancel: threading.Event | None = None,
) -> str:
    """Read *lines* to completion and return the aggregated response text.

    A fresh :class:`ResponseAggregator` is created for every call, so no
    state carries over between requests.

    Args:
        lines: Line source for one response (e.g. an HTTP body).
        on_update: Called with the aggregated text after every fragment,
            for incremental "typing" display.
        cancel: When set, reading stops before the next line and the
            partial text is discarded.

    Returns:
        The concatenated ``response`` text of all fragments.

    Raises:
        StreamCancelledError: If *cancel* was set before the stream ended.
    """
    aggregator = ResponseAggregator()
    fragments = 0

    source = lines if cancel is None else _until_cancelled(lines, cancel)
    for fragment in iter_fragments(source):
        snapshot = aggregator.append(fragment)
        fragments += 1
        if on_update is not None:
            on_update(snapshot)

    if not aggregator.complete:
        logger.debug("Stream ended without a final fragment")
    text = aggregator.final_text()
    logger.debug("Aggregated %d fragments into %d characters", fragments, len(text))
    return text


def _until_cancelled(
    lines: Iterable[str | bytes],
    cancel: threading.Event,
) -> Iterator[str | bytes]:
    """Pass *lines* through, checking *cancel* before each read."""
    iterator = iter(lines)
    while True:
        if cancel.is_set():
            raise StreamCancelledError("Stream cancelled by caller")
        try:
            line = next(iterator)
        except StopIteration:
            return
        yield line
