# chuk_oauth_token_retriever/config.py
"""Configuration for the client credentials token retriever."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "CHUK_OAUTH_"


class TokenRetrieverConfig(BaseSettings):
    """
    Settings needed to fetch an access token with client credentials.

    Values passed to the constructor win; anything left out is read from
    ``CHUK_OAUTH_<FIELD_NAME>`` environment variables (for example
    ``CHUK_OAUTH_CLIENT_ID``).
    """

    token_endpoint_url: str
    client_id: str
    client_secret: str
    scope: Optional[str] = None
    urlencode_header: bool = False
    login_retry_backoff_ms: int = Field(default=100, ge=0)
    login_retry_backoff_max_ms: int = Field(default=10000, ge=0)
    login_connect_timeout_ms: Optional[int] = None
    login_read_timeout_ms: Optional[int] = None

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("token_endpoint_url")
    @classmethod
    def _must_be_http(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("token_endpoint_url must start with http:// or https://")
        return v

    @model_validator(mode="after")
    def _backoff_window(self) -> "TokenRetrieverConfig":
        if self.login_retry_backoff_max_ms < self.login_retry_backoff_ms:
            raise ValueError(
                "login_retry_backoff_max_ms must not be less than "
                "login_retry_backoff_ms"
            )
        return self
