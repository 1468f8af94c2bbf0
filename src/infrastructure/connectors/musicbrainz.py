"""MusicBrainz recording search connector.

This module talks to the MusicBrainz web service (JSON API, ``/ws/2``) and
turns recording search responses into domain candidate recordings. Requests
are throttled to comply with the MusicBrainz API policy (1 request per
second, identified by a User-Agent).

Key components:
- MusicBrainzConnector: Rate-limited search client with error mapping

Errors are mapped to domain exceptions:
- cancel event set while waiting -> LookupInterruptedError
- per-request timeout exceeded -> LookupTimeoutError
- transport failure -> UpstreamRequestError
- non-2xx response -> UpstreamStatusError
- unparseable body -> ResponseDecodeError
"""

import asyncio
from typing import Any, ClassVar

from aiolimiter import AsyncLimiter
from attrs import define, field
import httpx

from src.config import get_logger, resilient_operation
from src.domain.exceptions import (
    LookupTimeoutError,
    ResponseDecodeError,
    UpstreamRequestError,
    UpstreamStatusError,
)
from src.domain.lookup import CandidateRecording, SearchResponse
from src.infrastructure.connectors.base_connector import await_or_interrupt

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="musicbrainz")


@define(slots=True)
class MusicBrainzConnector:
    """Rate-limited MusicBrainz recording search client.

    All searches share one limiter, so concurrent callers are admitted at
    most ``rate_limit`` times per second (burst of one). Admission order is
    not FIFO. Each request has a fixed timeout independent of any caller
    cancellation.

    Attributes:
        user_agent: Client identification sent with every request
        base_url: Web service root
        request_timeout: Per-request timeout in seconds
        rate_limit: Admitted requests per second
        search_limit: Optional ``limit`` parameter for searches
        transport: Optional httpx transport (tests inject a MockTransport)
    """

    user_agent: str
    base_url: str = "https://musicbrainz.org/ws/2"
    request_timeout: float = 10.0
    rate_limit: float = 1.0
    search_limit: int | None = None
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    connector_name: str = "musicbrainz"
    _limiter: AsyncLimiter = field(init=False, repr=False)
    _client: httpx.AsyncClient | None = field(default=None, init=False, repr=False)

    SEARCH_PATH: ClassVar[str] = "/recording"
    # Related entities included with each recording
    INCLUDES: ClassVar[tuple[str, ...]] = ("artists", "releases", "isrcs")

    def __attrs_post_init__(self) -> None:
        """Create the shared rate limiter."""
        # One token per 1/rate seconds keeps the bucket at a burst of one
        self._limiter = AsyncLimiter(1, 1 / self.rate_limit)
        logger.debug(
            "Initialized MusicBrainz connector",
            rate_limit=self.rate_limit,
            timeout=self.request_timeout,
        )

    @property
    def search_url(self) -> str:
        """Absolute URL of the recording search endpoint."""
        return f"{self.base_url.rstrip('/')}{self.SEARCH_PATH}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.request_timeout),
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                transport=self.transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "MusicBrainzConnector":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _search_params(self, query: str) -> dict[str, str]:
        params = {"query": query, "fmt": "json", "inc": " ".join(self.INCLUDES)}
        if self.search_limit is not None:
            params["limit"] = str(self.search_limit)
        return params

    @resilient_operation("musicbrainz_search_recordings")
    async def search_recordings(
        self,
        query: str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> list[CandidateRecording]:
        """Search recordings, waiting for rate limiter admission first.

        Args:
            query: Lucene-style query, see ``src.domain.lookup.build_recording_query``
            cancel: Optional event; when set, pending waits are abandoned

        Returns:
            Candidate recordings in MusicBrainz ranking order

        Raises:
            LookupInterruptedError: ``cancel`` was set during a wait
            LookupTimeoutError: The request exceeded ``request_timeout``
            UpstreamRequestError: The request failed at the transport level
            UpstreamStatusError: MusicBrainz answered with a non-2xx status
            ResponseDecodeError: The body was not a valid search response
        """
        await await_or_interrupt(self._limiter.acquire(), cancel, "rate_limit")

        response = await await_or_interrupt(self._send(query), cancel, "request")
        recordings = self._decode(response)

        logger.debug(
            f"MusicBrainz search returned {len(recordings)} recordings",
            query=query,
        )
        return recordings

    async def _send(self, query: str) -> httpx.Response:
        client = self._get_client()
        try:
            # httpx timeouts apply per phase; this bounds the whole exchange
            async with asyncio.timeout(self.request_timeout):
                response = await client.get(
                    self.search_url, params=self._search_params(query)
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            raise LookupTimeoutError(
                f"MusicBrainz request timed out after {self.request_timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamRequestError(
                f"Failed to execute MusicBrainz request: {e}"
            ) from e

        if not response.is_success:
            raise UpstreamStatusError(response.status_code, str(response.url))
        return response

    def _decode(self, response: httpx.Response) -> list[CandidateRecording]:
        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Failed to decode response from {response.url}: {e}"
            ) from e
        return list(SearchResponse.from_json(payload).recordings)
