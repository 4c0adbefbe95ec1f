"""OAuth 2.0 client credentials access token retriever.

This library fetches bearer access tokens from an OAuth 2.0 token endpoint
using the client credentials grant (RFC 6749 section 4.4):
- Request body and Basic Authorization header formatting (RFC 6749, RFC 7617)
- A single POST exchange over a pluggable connection handle
- Error classification into retryable and non-retryable failures
- Access token extraction from the JSON token response
"""

from .config import TokenRetrieverConfig
from .connection import ConnectionHandle, HttpxConnection
from .exceptions import (
    InvalidArgumentError,
    RetryableIOError,
    TokenParseError,
    TokenRetrievalError,
    UnretryableError,
)
from .formatting import format_authorization_header, format_request_body
from .retriever import HttpAccessTokenRetriever
from .retry import Retry
from .streams import copy
from .tokens import parse_access_token
from .transport import format_error_message, post

__version__ = "0.1.0"

__all__ = [
    "TokenRetrieverConfig",
    "ConnectionHandle",
    "HttpxConnection",
    "TokenRetrievalError",
    "InvalidArgumentError",
    "UnretryableError",
    "RetryableIOError",
    "TokenParseError",
    "format_authorization_header",
    "format_request_body",
    "HttpAccessTokenRetriever",
    "Retry",
    "copy",
    "parse_access_token",
    "format_error_message",
    "post",
]
