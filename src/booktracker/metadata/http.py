# ABOUTME: HTTP client used by catalog lookups to reach external book APIs.
# ABOUTME: Spaces out requests, retries throttling and server errors, and accepts a fake transport.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "booktracker/0.1.0"

# Throttling and transient server failures are worth another attempt.
_RETRY_ON = frozenset({429, 500, 502, 503, 504})


class MetadataFetchError(Exception):
    """Raised when a catalog API request fails or keeps failing."""


@runtime_checkable
class HttpClient(Protocol):
    """Anything that can GET a JSON document from a catalog API."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class BooktrackerHttpClient:
    """httpx-backed JSON client with request spacing and exponential backoff.

    Usable as a context manager so the CLI can release the connection pool
    once a command finishes.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport,
        )
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request: float | None = None

    def __enter__(self) -> "BooktrackerHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """GET ``url`` and return the decoded JSON body.

        Raises:
            MetadataFetchError: On transport errors, non-retryable statuses,
                undecodable bodies, or when every retry was used up.
        """
        status = 0
        for attempt in range(self._max_retries + 1):
            self._wait_for_slot()
            try:
                response = self._client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request to {url} failed: {exc}") from exc

            status = response.status_code
            if status == httpx.codes.OK:
                try:
                    return response.json()
                except ValueError as exc:
                    raise MetadataFetchError(f"Invalid JSON from {url}") from exc
            if status not in _RETRY_ON:
                raise MetadataFetchError(f"HTTP {status} from {url}")
            if attempt == self._max_retries:
                break

            backoff = self._retry_delay * 2**attempt
            logger.warning(
                "HTTP %d from %s, retry %d/%d in %.1fs",
                status,
                url,
                attempt + 1,
                self._max_retries,
                backoff,
            )
            time.sleep(backoff)

        raise MetadataFetchError(
            f"HTTP {status} from {url} after {self._max_retries + 1} attempts"
        )

    def _wait_for_slot(self) -> None:
        """Sleep until at least min_request_interval has passed since the last request."""
        if self._min_interval > 0 and self._last_request is not None:
            remaining = self._min_interval - (time.monotonic() - self._last_request)
            if remaining > 0:
                time.sleep(remaining)
        self._last_request = time.monotonic()
