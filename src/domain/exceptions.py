"""Error types raised while looking up and hydrating track metadata.

Every failure is terminal for the current call. Nothing here is retried
internally; retry policy belongs to the caller.
"""


class HydrationError(Exception):
    """Base class for lookup and hydration failures."""


class InvalidSearchParamsError(HydrationError, ValueError):
    """Raised when no search field (track, artist, release) was provided."""


class LookupInterruptedError(HydrationError):
    """Raised when the caller's cancellation signal fired before the lookup finished.

    Attributes:
        stage: Where the lookup was waiting ("rate_limit", "request" or "in_flight")
    """

    def __init__(self, stage: str) -> None:
        self.stage = stage
        super().__init__(f"MusicBrainz lookup interrupted while waiting on {stage}")


class UpstreamError(HydrationError):
    """Base class for failures talking to the MusicBrainz web service."""


class LookupTimeoutError(UpstreamError):
    """Raised when the request exceeded the fixed per-request timeout."""


class UpstreamRequestError(UpstreamError):
    """Raised when the request failed at the transport level (DNS, connection)."""


class UpstreamStatusError(UpstreamError):
    """Raised for a non-2xx response.

    Attributes:
        status_code: HTTP status returned by MusicBrainz
        url: Request URL
    """

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"MusicBrainz request to {url} returned status {status_code}")


class ResponseDecodeError(UpstreamError):
    """Raised when the response body is not a well-formed search result."""


class NoResultsError(HydrationError):
    """Raised when the search returned no candidate recordings."""


class MissingReleaseError(HydrationError):
    """Raised when no release could be selected for the chosen recording.

    Attributes:
        recording_id: MBID of the recording without usable releases
    """

    def __init__(self, recording_id: str) -> None:
        self.recording_id = recording_id
        super().__init__(f"No release available for recording {recording_id}")
