"""Central error types used across the application."""

from __future__ import annotations


class StravaError(RuntimeError):
    """Base error for every leaderboard retrieval failure."""


class AuthError(StravaError):
    """Raised when logging in fails or the session is rejected."""


class FetchError(StravaError):
    """Raised on transport failures or unexpected HTTP statuses."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(StravaError):
    """Raised when markup or a required field does not have the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        raw: str | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.raw = raw

    def __str__(self) -> str:
        message = super().__str__()
        if self.raw is not None:
            return f"{message} (raw={self.raw!r})"
        return message


__all__ = [
    "StravaError",
    "AuthError",
    "FetchError",
    "ParseError",
]
