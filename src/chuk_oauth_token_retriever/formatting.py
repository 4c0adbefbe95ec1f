# chuk_oauth_token_retriever/formatting.py
"""Request body and Authorization header formatting for the token endpoint."""

import base64
from typing import Optional
from urllib.parse import quote_plus

from .exceptions import InvalidArgumentError

GRANT_TYPE_BODY = "grant_type=client_credentials"


def form_urlencode(value: str) -> str:
    """
    Encode a value using application/x-www-form-urlencoded rules.

    Spaces become ``+``. Letters, digits and ``.-*_`` are kept as-is and
    every other UTF-8 byte is written as ``%XX``.

    Args:
        value: Text to encode

    Returns:
        The encoded text
    """
    # quote_plus always leaves "~" alone; the form encoding escapes it
    return quote_plus(value, safe="*").replace("~", "%7E")


def _sanitize(name: str, value: Optional[str]) -> str:
    if value is None:
        raise InvalidArgumentError(f"The value for {name} must be non-null")

    value = value.strip()
    if not value:
        raise InvalidArgumentError(f"The value for {name} must be non-empty")

    return value


def format_request_body(scope: Optional[str] = None) -> str:
    """
    Build the client_credentials grant request body.

    Args:
        scope: Optional scope; blank values are left out of the body

    Returns:
        ``grant_type=client_credentials`` with ``&scope=<encoded>`` appended
        when a non-blank scope was given
    """
    if scope is None or not scope.strip():
        return GRANT_TYPE_BODY

    return f"{GRANT_TYPE_BODY}&scope={form_urlencode(scope.strip())}"


def format_authorization_header(
    client_id: Optional[str], client_secret: Optional[str], urlencode: bool = False
) -> str:
    """
    Build a ``Basic`` Authorization header value (RFC 7617).

    The standard base64 alphabet is used, not the URL-safe one. When
    ``urlencode`` is set, the client ID and secret are form-encoded before
    they are joined, as RFC 6749 section 2.3.1 describes.

    Args:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        urlencode: Whether to URL-encode the credentials first

    Returns:
        Header value of the form ``Basic <base64>``

    Raises:
        InvalidArgumentError: If either value is None, empty or whitespace
    """
    client_id = _sanitize("the token endpoint request client ID parameter", client_id)
    client_secret = _sanitize(
        "the token endpoint request client secret parameter", client_secret
    )

    if urlencode:
        client_id = form_urlencode(client_id)
        client_secret = form_urlencode(client_secret)

    credentials = f"{client_id}:{client_secret}".encode("utf-8")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"
