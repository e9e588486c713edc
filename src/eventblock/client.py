"""HTTP client for the streaming text-generation backend.

Posts a :class:`~eventblock.models.stream.GenerateRequest` to
``{base_url}generate`` and yields the response body line by line.  Every
transport problem surfaces as a single
:class:`~eventblock.exceptions.TransportError`; the call is made once and
never retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx

from eventblock.config import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_REQUEST_TIMEOUT
from eventblock.exceptions import TransportError
from eventblock.models.stream import GenerateRequest

logger = logging.getLogger(__name__)

_GENERATE_PATH = "generate"


class GenerateClient:
    """Streaming client for an Ollama-style ``/generate`` endpoint.

    Args:
        base_url: API root, e.g. ``"http://localhost:11434/api/"``.
        model: Model name sent with every request.
        timeout: Connect/read timeout in seconds.
        http_client: Pre-built :class:`httpx.Client` to use instead of
            creating one (tests pass one with a mock transport).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._model = model
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=timeout)

    @property
    def generate_url(self) -> str:
        return self._base_url + _GENERATE_PATH

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def stream_lines(self, prompt: str) -> Iterator[str]:
        """Send *prompt* and yield the streamed response body line by line.

        The HTTP response stays open while the caller iterates and is
        closed when the generator finishes or is closed early (for
        example when the consumer stops after the final fragment).

        Args:
            prompt: Full prompt text.

        Yields:
            Raw response lines without their line terminators.

        Raises:
            TransportError: On a non-2xx status, an empty body, or any
                connection, timeout or read failure.
        """
        request = GenerateRequest(model=self._model, prompt=prompt)
        logger.debug("POST %s (model=%s)", self.generate_url, self._model)

        try:
            with self._client.stream(
                "POST", self.generate_url, json=request.model_dump()
            ) as response:
                if not response.is_success:
                    logger.error(
                        "Generate call failed with HTTP %d", response.status_code
                    )
                    raise TransportError(
                        f"API call failed with code {response.status_code}",
                        status_code=response.status_code,
                    )
                yield from self._iter_body(response)
        except httpx.HTTPError as exc:
            logger.error("Generate call failed: %s", exc)
            raise TransportError(f"API call failed: {exc}") from exc

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GenerateClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _iter_body(response: httpx.Response) -> Iterator[str]:
        """Yield body lines, failing if the body turns out to be empty."""
        received = False
        for line in response.iter_lines():
            received = True
            yield line
        if not received:
            logger.error("Generate call returned an empty body")
            raise TransportError(
                "Response body is null", status_code=response.status_code
            )
