#!/usr/bin/env python3
"""
Command line tool for fetching client credentials access tokens.

Usage:
    chuk-token retrieve --token-url <url> --client-id <id> --client-secret <secret>
    chuk-token retrieve --scope "read write" --show-token

Any option left out is read from the environment (CHUK_OAUTH_TOKEN_ENDPOINT_URL,
CHUK_OAUTH_CLIENT_ID, CHUK_OAUTH_CLIENT_SECRET, CHUK_OAUTH_SCOPE, ...).
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import TokenRetrieverConfig
from .exceptions import TokenRetrievalError
from .retriever import HttpAccessTokenRetriever


def safe_display_token(token: str, prefix_len: int = 20, suffix_len: int = 6) -> str:
    """Safely display a token with most characters redacted."""
    if len(token) <= prefix_len + suffix_len:
        return f"{token[:10]}..."

    prefix = token[:prefix_len]
    suffix = token[-suffix_len:]
    redacted_len = len(token) - prefix_len - suffix_len

    return f"{prefix}...{'*' * min(redacted_len, 20)}...{suffix}"


def print_header(text: str):
    """Print a formatted header."""
    print("\n" + "=" * 60)
    print(text)
    print("=" * 60)


def cmd_retrieve(config: TokenRetrieverConfig, show_token: bool = False) -> int:
    """Fetch an access token and print it."""
    if not show_token:
        print_header("Retrieving Access Token")
        print(f"Token Endpoint: {config.token_endpoint_url}")
        print(f"Client ID: {config.client_id}")
        if config.scope:
            print(f"Scope: {config.scope}")

    try:
        with HttpAccessTokenRetriever(config) as retriever:
            access_token = retriever.retrieve()
    except TokenRetrievalError as e:
        kind = "retryable" if e.retryable else "not retryable"
        print(f"\n❌ Token retrieval failed ({kind}): {e}", file=sys.stderr)
        return 1

    if show_token:
        print(access_token)
        return 0

    print("\n✅ Token retrieved")
    print(f"Access Token: {safe_display_token(access_token)}")
    print("\nAuthorization Header:")
    print(f"  {safe_display_token(f'Bearer {access_token}', prefix_len=15, suffix_len=6)}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chuk-token",
        description="OAuth 2.0 client credentials token retriever",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chuk-token retrieve --token-url https://issuer.example.com/oauth2/token \\
      --client-id my-client --client-secret s3cret --scope "read write"

  # Credentials from the environment, raw token on stdout
  export CHUK_OAUTH_TOKEN_ENDPOINT_URL=https://issuer.example.com/oauth2/token
  export CHUK_OAUTH_CLIENT_ID=my-client
  export CHUK_OAUTH_CLIENT_SECRET=s3cret
  chuk-token retrieve --show-token
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    retrieve_parser = subparsers.add_parser(
        "retrieve", help="Retrieve an access token from the token endpoint"
    )
    retrieve_parser.add_argument(
        "--token-url", dest="token_endpoint_url", help="Token endpoint URL"
    )
    retrieve_parser.add_argument("--client-id", help="OAuth client ID")
    retrieve_parser.add_argument("--client-secret", help="OAuth client secret")
    retrieve_parser.add_argument("--scope", help="Requested scope")
    retrieve_parser.add_argument(
        "--urlencode-header",
        action="store_true",
        default=None,
        help="URL-encode the client ID and secret in the Authorization header",
    )
    retrieve_parser.add_argument(
        "--retry-backoff-ms",
        dest="login_retry_backoff_ms",
        type=int,
        help="Initial retry backoff in milliseconds (default: 100)",
    )
    retrieve_parser.add_argument(
        "--retry-backoff-max-ms",
        dest="login_retry_backoff_max_ms",
        type=int,
        help="Maximum total retry window in milliseconds (default: 10000)",
    )
    retrieve_parser.add_argument(
        "--connect-timeout-ms",
        dest="login_connect_timeout_ms",
        type=int,
        help="Connect timeout in milliseconds",
    )
    retrieve_parser.add_argument(
        "--read-timeout-ms",
        dest="login_read_timeout_ms",
        type=int,
        help="Read timeout in milliseconds",
    )
    retrieve_parser.add_argument(
        "--show-token",
        action="store_true",
        help="Print only the raw access token",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        if args.command == "retrieve":
            try:
                overrides = {
                    "token_endpoint_url": args.token_endpoint_url,
                    "client_id": args.client_id,
                    "client_secret": args.client_secret,
                    "scope": args.scope,
                    "urlencode_header": args.urlencode_header,
                    "login_retry_backoff_ms": args.login_retry_backoff_ms,
                    "login_retry_backoff_max_ms": args.login_retry_backoff_max_ms,
                    "login_connect_timeout_ms": args.login_connect_timeout_ms,
                    "login_read_timeout_ms": args.login_read_timeout_ms,
                }
                config = TokenRetrieverConfig(
                    **{k: v for k, v in overrides.items() if v is not None}
                )
            except ValidationError as e:
                print(f"❌ Invalid configuration:\n{e}", file=sys.stderr)
                return 1
            return cmd_retrieve(config, show_token=args.show_token)
        else:  # pragma: no cover
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\n\n❌ Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
