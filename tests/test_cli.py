"""Tests for CLI module."""

from unittest.mock import MagicMock, patch

import pytest

from chuk_oauth_token_retriever.cli import (
    cmd_retrieve,
    main,
    print_header,
    safe_display_token,
)
from chuk_oauth_token_retriever.config import TokenRetrieverConfig
from chuk_oauth_token_retriever.exceptions import RetryableIOError, UnretryableError

TOKEN_URL = "https://issuer.example.com/oauth2/token"


@pytest.fixture
def config():
    """Provide a retriever configuration."""
    return TokenRetrieverConfig(
        token_endpoint_url=TOKEN_URL,
        client_id="test_client_id",
        client_secret="test_client_secret",
        scope="read",
    )


@pytest.fixture
def mock_retriever():
    """Patch the retriever used by the CLI."""
    with patch("chuk_oauth_token_retriever.cli.HttpAccessTokenRetriever") as mock_class:
        retriever = MagicMock()
        mock_class.return_value.__enter__.return_value = retriever
        retriever.mock_class = mock_class
        yield retriever


class TestSafeDisplayToken:
    """Test token display redaction."""

    def test_short_token(self):
        assert safe_display_token("short123") == "short123..."

    def test_normal_token(self):
        token = "a" * 50
        result = safe_display_token(token)
        assert result.startswith("a" * 20)
        assert result.endswith("a" * 6)
        assert "*" in result

    def test_custom_lengths(self):
        token = "x" * 100
        result = safe_display_token(token, prefix_len=10, suffix_len=4)
        assert result.startswith("x" * 10 + "...")
        assert result.endswith("..." + "x" * 4)


class TestPrintHeader:
    """Test header printing."""

    def test_print_header(self, capsys):
        print_header("Test Header")
        captured = capsys.readouterr()
        assert "Test Header" in captured.out
        assert "=" * 60 in captured.out


class TestCmdRetrieve:
    """Test retrieve command."""

    def test_success(self, config, mock_retriever, capsys):
        mock_retriever.retrieve.return_value = "access_token_" + "z" * 40

        result = cmd_retrieve(config)

        assert result == 0
        mock_retriever.mock_class.assert_called_once_with(config)
        out = capsys.readouterr().out
        assert "Token retrieved" in out
        assert TOKEN_URL in out
        assert "z" * 40 not in out

    def test_show_token(self, config, mock_retriever, capsys):
        mock_retriever.retrieve.return_value = "raw-token"

        result = cmd_retrieve(config, show_token=True)

        assert result == 0
        assert capsys.readouterr().out == "raw-token\n"

    def test_unretryable_failure(self, config, mock_retriever, capsys):
        mock_retriever.retrieve.side_effect = UnretryableError("bad request")

        result = cmd_retrieve(config)

        assert result == 1
        err = capsys.readouterr().err
        assert "not retryable" in err
        assert "bad request" in err

    def test_retryable_failure(self, config, mock_retriever, capsys):
        mock_retriever.retrieve.side_effect = RetryableIOError("down")

        assert cmd_retrieve(config) == 1
        assert "(retryable)" in capsys.readouterr().err


class TestMain:
    """Test CLI entry point."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_retrieve_from_arguments(self):
        with patch("chuk_oauth_token_retriever.cli.cmd_retrieve", return_value=0) as cmd:
            result = main(
                [
                    "retrieve",
                    "--token-url",
                    TOKEN_URL,
                    "--client-id",
                    "id",
                    "--client-secret",
                    "secret",
                    "--scope",
                    "read write",
                    "--urlencode-header",
                    "--connect-timeout-ms",
                    "1000",
                    "--show-token",
                ]
            )

        assert result == 0
        config = cmd.call_args[0][0]
        assert config.token_endpoint_url == TOKEN_URL
        assert config.client_id == "id"
        assert config.scope == "read write"
        assert config.urlencode_header is True
        assert config.login_connect_timeout_ms == 1000
        assert cmd.call_args[1]["show_token"] is True

    def test_retrieve_from_environment(self, monkeypatch):
        monkeypatch.setenv("CHUK_OAUTH_TOKEN_ENDPOINT_URL", TOKEN_URL)
        monkeypatch.setenv("CHUK_OAUTH_CLIENT_ID", "env-id")
        monkeypatch.setenv("CHUK_OAUTH_CLIENT_SECRET", "env-secret")

        with patch("chuk_oauth_token_retriever.cli.cmd_retrieve", return_value=0) as cmd:
            assert main(["retrieve", "--client-id", "cli-id"]) == 0

        config = cmd.call_args[0][0]
        assert config.client_id == "cli-id"
        assert config.client_secret == "env-secret"
        assert config.urlencode_header is False

    def test_invalid_configuration(self, capsys):
        assert main(["retrieve", "--client-id", "id"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_keyboard_interrupt(self):
        with patch(
            "chuk_oauth_token_retriever.cli.cmd_retrieve",
            side_effect=KeyboardInterrupt,
        ):
            result = main(
                [
                    "retrieve",
                    "--token-url",
                    TOKEN_URL,
                    "--client-id",
                    "id",
                    "--client-secret",
                    "secret",
                ]
            )

        assert result == 130
