# chuk_oauth_token_retriever/connection.py
"""Connection handles used for the single token endpoint exchange."""

import io
import logging
from typing import BinaryIO, Dict, Optional, Protocol, runtime_checkable

import httpx

from .exceptions import RetryableIOError

logger = logging.getLogger(__name__)


@runtime_checkable
class ConnectionHandle(Protocol):
    """
    One-shot request/response channel to the token endpoint.

    The handle is owned by the caller: :func:`~.transport.post` reads from it
    and writes to it, but never closes or reuses it.
    """

    def set_header(self, name: str, value: str) -> None: ...

    def enable_output(self) -> None: ...

    def get_output_stream(self) -> BinaryIO: ...

    def get_response_code(self) -> int: ...

    def get_input_stream(self) -> BinaryIO: ...

    def get_error_stream(self) -> Optional[BinaryIO]: ...

    def set_connect_timeout(self, timeout_ms: int) -> None: ...

    def set_read_timeout(self, timeout_ms: int) -> None: ...


class HttpxConnection:
    """
    :class:`ConnectionHandle` backed by an ``httpx.Client``.

    The request is buffered in memory and sent the first time the response
    code is requested. Streams handed out are in-memory copies of the
    request or response body.
    """

    def __init__(
        self,
        url: str,
        method: str = "POST",
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the connection.

        Args:
            url: Token endpoint URL
            method: HTTP method to use
            client: Optional client to send with (not closed by this handle);
                a private client is created and owned otherwise
        """
        self.url = url
        self.method = method
        self.headers: Dict[str, str] = {}
        self.connect_timeout_ms: Optional[int] = None
        self.read_timeout_ms: Optional[int] = None
        self.output_enabled = False

        self._client = client
        self._owns_client = client is None
        self._output = io.BytesIO()
        self._response: Optional[httpx.Response] = None

    def __enter__(self) -> "HttpxConnection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def enable_output(self) -> None:
        self.output_enabled = True

    def get_output_stream(self) -> BinaryIO:
        if not self.output_enabled:
            raise RetryableIOError("Output is not enabled for this connection")
        return self._output

    def set_connect_timeout(self, timeout_ms: int) -> None:
        self.connect_timeout_ms = timeout_ms

    def set_read_timeout(self, timeout_ms: int) -> None:
        self.read_timeout_ms = timeout_ms

    def _timeout(self) -> httpx.Timeout:
        def seconds(timeout_ms: Optional[int]) -> Optional[float]:
            # Zero means wait forever, as with a URL connection
            if not timeout_ms:
                return None
            return timeout_ms / 1000.0

        return httpx.Timeout(
            None,
            connect=seconds(self.connect_timeout_ms),
            read=seconds(self.read_timeout_ms),
        )

    def _send(self) -> httpx.Response:
        if self._response is not None:
            return self._response

        if self._client is None:
            self._client = httpx.Client()

        content = self._output.getvalue() if self.output_enabled else None

        logger.debug(f"Sending {self.method} request to {self.url}")
        try:
            self._response = self._client.request(
                self.method,
                self.url,
                headers=self.headers,
                content=content,
                timeout=self._timeout(),
            )
        except httpx.HTTPError as e:
            raise RetryableIOError(
                f"Error sending request to {self.url}: {e}"
            ) from e

        logger.debug(
            f"Received HTTP {self._response.status_code} from {self.url}"
        )
        return self._response

    def get_response_code(self) -> int:
        return self._send().status_code

    def get_input_stream(self) -> BinaryIO:
        response = self._send()
        if response.status_code >= 400:
            raise RetryableIOError(
                f"Server returned HTTP response code {response.status_code} "
                f"for URL {self.url}",
                status_code=response.status_code,
            )
        return io.BytesIO(response.content)

    def get_error_stream(self) -> Optional[BinaryIO]:
        response = self._send()
        if response.status_code < 400 or not response.content:
            return None
        return io.BytesIO(response.content)

    def close(self) -> None:
        """Close the underlying client if this handle created it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
