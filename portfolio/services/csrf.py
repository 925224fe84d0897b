"""Single active CSRF token for the contact form.

One token is live per process. Issuing a new token supersedes the previous
one immediately; there is no grace period and no multi-token tracking.
"""

import secrets
import threading
import time
from collections.abc import Callable
from datetime import datetime, timezone

# Token lifetime
DEFAULT_TTL = 3600  # 1 hour

# 32 random bytes -> 256 bits of entropy
TOKEN_BYTES = 32


class CSRFTokenIssuer:
    """Issue, hold and validate the process-wide CSRF token."""

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._token: str | None = None
        self._expires_at: float = 0.0
        self._lock = threading.Lock()

    def _issue_locked(self) -> str:
        self._token = secrets.token_urlsafe(TOKEN_BYTES)
        self._expires_at = self._clock() + self._ttl
        return self._token

    def issue(self) -> str:
        """Generate a new token, discarding any previous one."""
        with self._lock:
            return self._issue_locked()

    def current(self) -> str:
        """Return the active token, issuing one only if none exists yet.

        An existing token is returned as-is; its expiry is not extended.
        """
        with self._lock:
            if self._token is None:
                return self._issue_locked()
            return self._token

    def validate(self, candidate: object) -> bool:
        """Return True only for the current, unexpired token."""
        if not isinstance(candidate, str):
            return False
        with self._lock:
            token, expires_at = self._token, self._expires_at
        if token is None:
            return False
        # surrogatepass: lone surrogates in a candidate must not raise
        if not secrets.compare_digest(
            token.encode(), candidate.encode("utf-8", "surrogatepass")
        ):
            return False
        return self._clock() < expires_at

    @property
    def expires_at(self) -> datetime | None:
        """Expiry of the active token, or None before the first issue."""
        with self._lock:
            if self._token is None:
                return None
            return datetime.fromtimestamp(self._expires_at, tz=timezone.utc)
