"""Shared fixtures for token retriever tests."""

import io
import os
from typing import Optional
from unittest.mock import Mock

import pytest

from chuk_oauth_token_retriever.connection import ConnectionHandle


def make_connection(
    response: str = "", status_code: int = 200, error: Optional[str] = None
) -> Mock:
    """Build a mocked connection handle returning the given response."""
    connection = Mock(spec=ConnectionHandle)
    connection.get_response_code.return_value = status_code
    connection.get_input_stream.return_value = io.BytesIO(response.encode("utf-8"))
    connection.get_output_stream.return_value = io.BytesIO()
    connection.get_error_stream.return_value = (
        io.BytesIO(error.encode("utf-8")) if error is not None else None
    )
    return connection


@pytest.fixture
def connection_builder():
    """Provide the mocked connection builder."""
    return make_connection


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CHUK_OAUTH_* variables from the host out of the tests."""
    for name in list(os.environ):
        if name.startswith("CHUK_OAUTH_"):
            monkeypatch.delenv(name, raising=False)
