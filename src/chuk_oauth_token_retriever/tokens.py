# chuk_oauth_token_retriever/tokens.py
"""Access token extraction from token endpoint responses."""

import json
from typing import Any

from .exceptions import InvalidArgumentError, TokenParseError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str) -> Any:
    """
    Parse strict JSON text.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected.

    Raises:
        ValueError: If the text is not valid JSON
    """
    return json.loads(text, parse_constant=_reject_constant)


def parse_access_token(response_body: str) -> str:
    """
    Extract ``access_token`` from a JSON token response.

    Args:
        response_body: Raw token endpoint response text

    Returns:
        The access token, exactly as sent by the server

    Raises:
        TokenParseError: If the response is not valid JSON
        InvalidArgumentError: If ``access_token`` is missing or blank
    """
    try:
        node = parse_json(response_body)
    except ValueError as e:
        raise TokenParseError(
            f"The token endpoint response was not valid JSON: {response_body}"
        ) from e

    access_token = node.get("access_token") if isinstance(node, dict) else None

    if not isinstance(access_token, str) or not access_token.strip():
        raise InvalidArgumentError(
            "The token endpoint response access_token value must be non-null "
            "and non-empty"
        )

    return access_token
