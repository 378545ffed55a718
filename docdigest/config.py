"""Client configuration with environment variable loading.

Pydantic-based configuration for the document lifecycle client.
Values come from the process environment, with a .env file loaded first.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


class ClientConfig(BaseModel):
    """Configuration for the summarization API client.

    Attributes:
        api_base_url: Base URL of the summarization API.
        request_timeout: Timeout in seconds for every HTTP request.
        upload_refresh_delay: Seconds to wait before refreshing after an upload.
        cognito_domain: Hosted identity domain used for sign-out redirects.
        cognito_client_id: Client ID registered with the identity provider.
        logout_uri: Where the identity provider sends the user after sign-out.
        dev_id_token: Bearer token to pre-authenticate local sessions.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("DOCDIGEST_API_URL", ""),
        validate_default=True,
        description="Base URL of the summarization API",
    )
    request_timeout: float = Field(
        default_factory=lambda: _env_float("DOCDIGEST_REQUEST_TIMEOUT", 30.0),
        gt=0.0,
        description="HTTP request timeout in seconds",
    )
    upload_refresh_delay: float = Field(
        default_factory=lambda: _env_float("DOCDIGEST_REFRESH_DELAY", 40.0),
        ge=0.0,
        description="Delay before the one-shot refresh that follows an upload",
    )
    cognito_domain: str | None = Field(
        default_factory=lambda: os.getenv("COGNITO_DOMAIN") or None,
        description="Identity provider domain for sign-out",
    )
    cognito_client_id: str | None = Field(
        default_factory=lambda: os.getenv("COGNITO_CLIENT_ID") or None,
        description="Identity provider client ID",
    )
    logout_uri: str | None = Field(
        default_factory=lambda: os.getenv("LOGOUT_URI") or None,
        description="Redirect target after sign-out",
    )
    dev_id_token: str | None = Field(
        default_factory=lambda: os.getenv("DOCDIGEST_ID_TOKEN") or None,
        description="Bearer token for local development sessions",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate that the base URL is set and normalize its trailing slash."""
        if not v or not v.strip():
            raise ValueError("API base URL required. Set DOCDIGEST_API_URL in .env")
        return v.strip().rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If DOCDIGEST_API_URL is not set.
    """
    return ClientConfig()
