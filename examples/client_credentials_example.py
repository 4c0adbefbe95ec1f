#!/usr/bin/env python3
"""
Client credentials token retrieval example.

This example fetches an access token from an OAuth 2.0 token endpoint with
the client credentials grant, then shows the lower-level building blocks
(header/body formatting, a single POST, token parsing) used directly.

Usage:
    python client_credentials_example.py <token_url> <client_id> <client_secret> [scope]
"""

import logging
import sys

from chuk_oauth_token_retriever import (
    HttpAccessTokenRetriever,
    HttpxConnection,
    TokenRetrievalError,
    TokenRetrieverConfig,
    format_authorization_header,
    format_request_body,
    parse_access_token,
    post,
)
from chuk_oauth_token_retriever.cli import safe_display_token


def main() -> int:
    if len(sys.argv) < 4:
        print(__doc__)
        return 1

    logging.basicConfig(level=logging.DEBUG)
    token_url, client_id, client_secret = sys.argv[1:4]
    scope = sys.argv[4] if len(sys.argv) > 4 else None

    # 1. High level: retries with backoff, returns just the token
    config = TokenRetrieverConfig(
        token_endpoint_url=token_url,
        client_id=client_id,
        client_secret=client_secret,
        scope=scope,
        login_connect_timeout_ms=5000,
        login_read_timeout_ms=5000,
    )

    try:
        with HttpAccessTokenRetriever(config) as retriever:
            token = retriever.retrieve()
        print(f"✅ Retriever token: {safe_display_token(token)}")
    except TokenRetrievalError as e:
        print(f"❌ Retrieval failed (retryable={e.retryable}): {e}")
        return 1

    # 2. Low level: one exchange over a connection handle, no retries
    with HttpxConnection(token_url) as connection:
        connection.set_header("Accept", "application/json")
        connection.set_header("Content-Type", "application/x-www-form-urlencoded")
        try:
            body = post(
                connection,
                authorization_header=format_authorization_header(
                    client_id, client_secret
                ),
                request_body=format_request_body(scope),
                connect_timeout_ms=5000,
                read_timeout_ms=5000,
            )
            token = parse_access_token(body)
        except TokenRetrievalError as e:
            print(f"❌ Single exchange failed (retryable={e.retryable}): {e}")
            return 1

    print(f"✅ Single exchange token: {safe_display_token(token)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
