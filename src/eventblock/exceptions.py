"""Custom exceptions for the eventblock extraction pipeline.

Only failures that the caller has to act on are exceptions.  A malformed
stream line or an unparseable response is not: those are skipped or
degrade to an empty :class:`~eventblock.models.events.EventExtractionResult`.
"""

from __future__ import annotations


class EventBlockError(Exception):
    """Base class for all eventblock errors."""


class TransportError(EventBlockError):
    """Raised when the generator could not be reached or refused the call.

    Covers non-2xx responses, a response without a body, and connection,
    read and timeout failures from the HTTP client.  The call is never
    retried.

    Attributes:
        status_code: HTTP status of the failed response, or ``None`` when
            no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StreamCancelledError(EventBlockError):
    """Raised when a caller cancels a stream before it completed.

    The partially aggregated text is discarded; no result is produced for
    a cancelled request.
    """
