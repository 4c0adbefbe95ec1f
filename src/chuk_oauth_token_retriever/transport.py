# chuk_oauth_token_retriever/transport.py
"""Single POST exchange with the token endpoint."""

import io
import json
import logging
from typing import Optional

from .connection import ConnectionHandle
from .exceptions import RetryableIOError, UnretryableError
from .streams import copy
from .tokens import parse_json

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_BAD_REQUEST = 400

# (code, description) key pairs used by different token issuers
_ERROR_KEY_PAIRS = (
    ("error", "error_description"),
    ("errorCode", "errorSummary"),
)


def post(
    connection: ConnectionHandle,
    authorization_header: Optional[str] = None,
    request_body: Optional[str] = None,
    connect_timeout_ms: Optional[int] = None,
    read_timeout_ms: Optional[int] = None,
) -> str:
    """
    Perform one POST exchange over an already configured connection.

    Args:
        connection: Connection handle owned by the caller (never closed here)
        authorization_header: Value for the Authorization header, if any
        request_body: Form-encoded request body, if any
        connect_timeout_ms: Connect timeout applied when not None and >= 0
        read_timeout_ms: Read timeout applied when not None and >= 0

    Returns:
        The UTF-8 decoded response body

    Raises:
        UnretryableError: If the endpoint answered HTTP 400
        RetryableIOError: On transport failures, other non-success statuses,
            or an empty response body
    """
    _handle_input(
        connection,
        authorization_header,
        request_body,
        connect_timeout_ms,
        read_timeout_ms,
    )
    return _handle_output(connection)


def _handle_input(
    connection: ConnectionHandle,
    authorization_header: Optional[str],
    request_body: Optional[str],
    connect_timeout_ms: Optional[int],
    read_timeout_ms: Optional[int],
) -> None:
    if authorization_header is not None:
        connection.set_header(AUTHORIZATION_HEADER, authorization_header)

    if connect_timeout_ms is not None and connect_timeout_ms >= 0:
        connection.set_connect_timeout(connect_timeout_ms)

    if read_timeout_ms is not None and read_timeout_ms >= 0:
        connection.set_read_timeout(read_timeout_ms)

    if request_body is not None:
        connection.enable_output()
        out = connection.get_output_stream()
        copy(io.BytesIO(request_body.encode("utf-8")), out)
        out.flush()


def _handle_output(connection: ConnectionHandle) -> str:
    response_code = connection.get_response_code()
    logger.debug(f"Token endpoint responded with HTTP {response_code}")

    if response_code not in (HTTP_OK, HTTP_CREATED):
        error_body = _read_error_body(connection)
        message = format_error_message(error_body)

        if response_code == HTTP_BAD_REQUEST:
            raise UnretryableError(
                f"The response code {response_code} and error response {message} "
                "was encountered reading the token endpoint response; "
                "will not attempt further retries",
                status_code=response_code,
            )

        raise RetryableIOError(
            f"The response code {response_code} and error response {message} "
            "was encountered reading the token endpoint response; "
            "will attempt further retries",
            status_code=response_code,
        )

    buffer = io.BytesIO()
    try:
        copy(connection.get_input_stream(), buffer)
        response_body = buffer.getvalue().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RetryableIOError(
            f"Error reading the token endpoint response: {e}",
            status_code=response_code,
        ) from e

    if not response_body:
        raise RetryableIOError(
            "The token endpoint response was unexpectedly empty",
            status_code=response_code,
        )

    return response_body


def _read_error_body(connection: ConnectionHandle) -> str:
    try:
        stream = connection.get_error_stream()
        if stream is None:
            return ""
        buffer = io.BytesIO()
        copy(stream, buffer)
        return buffer.getvalue().decode("utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Error reading the token endpoint error response: {e}")
        return ""


def format_error_message(error_body: Optional[str]) -> str:
    """
    Build a readable summary of a token endpoint error response.

    Recognized ``error``/``error_description`` or ``errorCode``/``errorSummary``
    pairs are rendered as ``{"<code>" - "<description>"}``. Anything else is
    wrapped verbatim in braces.

    Args:
        error_body: Raw error response text (may be None)

    Returns:
        The formatted message
    """
    if error_body is None or not error_body.strip():
        return "{}"

    try:
        node = parse_json(error_body)
    except ValueError:
        return f"{{{error_body}}}"

    if isinstance(node, dict):
        for code_key, description_key in _ERROR_KEY_PAIRS:
            if code_key in node and description_key in node:
                code = json.dumps(node[code_key], ensure_ascii=False)
                description = json.dumps(node[description_key], ensure_ascii=False)
                return f"{{{code} - {description}}}"

    return f"{{{error_body}}}"
