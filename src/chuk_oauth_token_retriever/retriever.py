# chuk_oauth_token_retriever/retriever.py
"""Access token retrieval from an OAuth 2.0 token endpoint."""

import logging
from typing import Callable, Optional

import httpx

from .config import TokenRetrieverConfig
from .connection import ConnectionHandle, HttpxConnection
from .formatting import format_authorization_header, format_request_body
from .retry import Retry
from .tokens import parse_access_token
from .transport import post

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[str], ConnectionHandle]


class HttpAccessTokenRetriever:
    """
    Fetches access tokens using the client credentials grant.

    Each call to :meth:`retrieve` sends one token request per attempt, with
    exponential backoff between retryable failures. Tokens are not cached.
    """

    def __init__(
        self,
        config: TokenRetrieverConfig,
        client: Optional[httpx.Client] = None,
        connection_factory: Optional[ConnectionFactory] = None,
    ):
        """
        Initialize the retriever.

        Args:
            config: Token endpoint and client credentials
            client: Optional shared httpx client for the default connections
            connection_factory: Optional factory returning a fresh connection
                handle for a URL (default: :class:`HttpxConnection`)
        """
        self.config = config
        self._client = client
        self._owns_client = False
        self._connection_factory = connection_factory

    def __enter__(self) -> "HttpAccessTokenRetriever":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _open_connection(self) -> ConnectionHandle:
        if self._connection_factory is not None:
            return self._connection_factory(self.config.token_endpoint_url)

        if self._client is None:
            self._client = httpx.Client()
            self._owns_client = True

        return HttpxConnection(self.config.token_endpoint_url, client=self._client)

    def _request(self, authorization_header: str, request_body: str) -> str:
        connection = self._open_connection()
        connection.set_header("Accept", "application/json")
        connection.set_header("Cache-Control", "no-cache")
        connection.set_header("Content-Type", "application/x-www-form-urlencoded")

        try:
            return post(
                connection,
                authorization_header,
                request_body,
                self.config.login_connect_timeout_ms,
                self.config.login_read_timeout_ms,
            )
        finally:
            close = getattr(connection, "close", None)
            if close is not None:
                close()

    def retrieve(self) -> str:
        """
        Retrieve an access token from the token endpoint.

        Returns:
            The access token

        Raises:
            InvalidArgumentError: If the credentials are blank or the
                response has no access token
            UnretryableError: If the endpoint rejected the request (HTTP 400)
            RetryableIOError: If every attempt failed with a retryable error
        """
        authorization_header = format_authorization_header(
            self.config.client_id,
            self.config.client_secret,
            self.config.urlencode_header,
        )
        request_body = format_request_body(self.config.scope)

        retry: Retry[str] = Retry(
            self.config.login_retry_backoff_ms,
            self.config.login_retry_backoff_max_ms,
        )

        logger.debug(f"Requesting access token from {self.config.token_endpoint_url}")
        response_body = retry.execute(
            lambda: self._request(authorization_header, request_body)
        )

        access_token = parse_access_token(response_body)
        logger.debug(
            f"Retrieved access token from {self.config.token_endpoint_url}"
        )
        return access_token

    def close(self) -> None:
        """Close the httpx client if the retriever created it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
            self._owns_client = False
