"""Custom exception hierarchy for pydisco."""

from __future__ import annotations


class DiscoError(Exception):
    """Base exception for all pydisco errors."""


class DiscoConfigError(DiscoError):
    """Invalid or missing configuration."""


class DiscoInvalidIdentifierError(DiscoError):
    """An identifier could not be parsed as a snowflake."""

    def __init__(self, message: str, *, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class DiscoTimestampError(DiscoError):
    """A timestamp field in a payload could not be parsed.

    Raised during merge; the entity keeps the state it had before the
    failing payload was applied.
    """

    def __init__(self, message: str, *, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class DiscoTransportError(DiscoError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DiscoApiError(DiscoError):
    """API rejected a request with an error body."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        endpoint: str = "",
        status_code: int | None = None,
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(message)


class DiscoNotFoundError(DiscoApiError):
    """The requested resource does not exist (HTTP 404)."""


class DiscoRateLimitError(DiscoApiError):
    """Rate limited (HTTP 429).

    ``retry_after`` carries the server hint in seconds. The client does
    not retry on its own.
    """

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        code: str = "",
        endpoint: str = "",
        status_code: int | None = 429,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, code=code, endpoint=endpoint, status_code=status_code)
