"""Error taxonomy for the content cache, upstream fetches and CSRF checks."""


class ContentError(Exception):
    """Base class for recoverable content-refresh failures."""

    pass


class CacheIOError(ContentError):
    """The cache file could not be opened, created or written."""

    pass


class EncodingError(ContentError):
    """A snapshot could not be serialized."""

    pass


class DecodingError(ContentError):
    """Cached or fetched content could not be decoded."""

    pass


class NetworkError(ContentError):
    """The upstream could not be reached."""

    pass


class HTTPStatusError(ContentError):
    """The upstream answered with a non-success status code."""

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        where = f" from {url}" if url else ""
        super().__init__(f"Received non-2xx status code {status_code}{where}")


class ValidationError(ContentError):
    """A CSRF token was missing, mismatched or expired."""

    pass
