# chuk_oauth_token_retriever/exceptions.py
"""Errors raised while retrieving an access token.

Every error carries an explicit ``retryable`` flag so callers can decide
whether to try again without inspecting the exception type:

- :class:`InvalidArgumentError` - bad input supplied by the caller (blank
  credentials, token response without ``access_token``). Never retryable.
- :class:`UnretryableError` - the token endpoint rejected the request as
  malformed (HTTP 400). Retrying with the same credentials will not help.
- :class:`RetryableIOError` - transport failures, stream failures, any other
  non-success status, or an unexpectedly empty response.
"""

from typing import Optional


class TokenRetrievalError(Exception):
    """Base class for all token retrieval errors."""

    retryable: bool = False

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidArgumentError(TokenRetrievalError, ValueError):
    """Caller supplied malformed input before any network activity."""

    retryable = False


class UnretryableError(TokenRetrievalError):
    """The token endpoint rejected the request itself (HTTP 400)."""

    retryable = False


class RetryableIOError(TokenRetrievalError, OSError):
    """Transport or server-side failure; the caller may retry with backoff."""

    retryable = True


class TokenParseError(RetryableIOError):
    """A response body that should have been JSON was not."""
