"""Turn pipeline: message in, classified and parsed response out.

Wires the components together for one conversation turn:

1. **Prompt** -- wrap the user's message with the output-format
   instructions, reference date and timezone.
2. **Stream** -- send it to the generator and aggregate the NDJSON
   fragments into one text, reporting snapshots as they grow.
3. **Classify** -- decide whether the text is event data.
4. **Parse** -- extract events from event-bearing text (or always, when
   extraction is forced).

:meth:`EventParser.run_turn` returns a :class:`TurnResult` for chat-style
callers; :meth:`EventParser.parse_event` returns the canonical block
string used by the command line.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import closing
from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal
from zoneinfo import ZoneInfo

from eventblock.classifier import is_event_bearing
from eventblock.client import GenerateClient
from eventblock.config import Settings, load_settings
from eventblock.exceptions import TransportError
from eventblock.extraction import parse_event_text
from eventblock.formatter import format_event_block
from eventblock.models.events import EventExtractionResult
from eventblock.prompts import build_event_prompt, build_json_prompt
from eventblock.streaming import aggregate_stream

logger = logging.getLogger(__name__)

OutputFormat = Literal["block", "json"]

# Prefix of what EventParser.parse_event returns when the generator call failed.
PARSE_ERROR_PREFIX = "Error parsing event: "

_PROMPT_BUILDERS: dict[str, Callable[[str, date, str], str]] = {
    "block": build_event_prompt,
    "json": build_json_prompt,
}


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one conversation turn.

    Attributes:
        text: The aggregated raw response (empty on transport failure).
        is_event_message: Whether *text* was classified as event data.
        events: Parsed events when the text was event-bearing or
            extraction was forced, otherwise ``None``.
        error: Transport failure message if the generator call failed.
    """

    text: str = ""
    is_event_message: bool = False
    events: EventExtractionResult | None = None
    error: str | None = None

    @property
    def display_text(self) -> str:
        """What a chat view shows for this turn."""
        if self.error is not None:
            return f"Error: {self.error}"
        if self.events is not None:
            return format_event_block(self.events)
        return self.text


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class EventParser:
    """Runs extraction turns against the text-generation backend.

    Turns on one instance are serialised: a second call waits until the
    first has finished, so two streams never share a buffer.

    Args:
        settings: Configuration; loaded from the environment when omitted.
        client: Stream source; built from *settings* when omitted.
        output_format: ``"block"`` (default) asks for labeled ``event-N``
            blocks, ``"json"`` asks for the JSON object shape.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: GenerateClient | None = None,
        output_format: OutputFormat = "block",
    ) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._client = client if client is not None else GenerateClient(
            base_url=self._settings.base_url,
            model=self._settings.model,
            timeout=self._settings.request_timeout,
        )
        self._build_prompt = _PROMPT_BUILDERS[output_format]
        self._lock = threading.Lock()

    def run_turn(
        self,
        message: str,
        *,
        on_update: Callable[[str], None] | None = None,
        cancel: threading.Event | None = None,
        force_extraction: bool = False,
        reference_date: date | None = None,
    ) -> TurnResult:
        """Send *message* to the generator and interpret the response.

        Args:
            message: The user's free-form text.
            on_update: Receives the growing response text after every
                streamed fragment.
            cancel: Set it to abandon the turn; see
                :func:`~eventblock.streaming.aggregate_stream`.
            force_extraction: Parse the response even when it is not
                classified as event data.
            reference_date: Date for resolving relative references.
                Defaults to today in the configured timezone.

        Returns:
            A :class:`TurnResult`.  Transport failures are reported in
            ``error`` rather than raised.

        Raises:
            ValueError: If *message* is blank.
            StreamCancelledError: If *cancel* was set mid-stream.
        """
        if not message.strip():
            raise ValueError("Message must not be blank")

        prompt = self._build_prompt(
            message,
            reference_date or self._today(),
            self._settings.timezone,
        )
        logger.debug("Prompt sent to generator:\n%s", prompt)

        with self._lock:
            try:
                with closing(self._client.stream_lines(prompt)) as lines:
                    text = aggregate_stream(lines, on_update=on_update, cancel=cancel)
            except TransportError as exc:
                return TurnResult(error=str(exc))

        logger.debug("Raw generator response:\n%s", text)

        is_event = is_event_bearing(text)
        if not (is_event or force_extraction):
            logger.info("Response classified as conversational text")
            return TurnResult(text=text)

        events = parse_event_text(text)
        logger.info(
            "Response classified as %s; %d event(s) extracted",
            "event data" if is_event else "text (extraction forced)",
            events.event_count,
        )
        return TurnResult(text=text, is_event_message=is_event, events=events)

    def parse_event(self, text: str, reference_date: date | None = None) -> str:
        """Extract events from *text* and render the canonical block.

        Args:
            text: Free-form text describing one or more events.
            reference_date: See :meth:`run_turn`.

        Returns:
            The ``event-N`` block, the ``"No events found"`` sentinel, or
            ``"Error parsing event: ..."`` when the generator call failed.
        """
        result = self.run_turn(
            text, force_extraction=True, reference_date=reference_date
        )
        if result.error is not None:
            return PARSE_ERROR_PREFIX + result.error
        return format_event_block(result.events or EventExtractionResult.empty())

    def close(self) -> None:
        self._client.close()

    def _today(self) -> date:
        return datetime.now(ZoneInfo(self._settings.timezone)).date()
