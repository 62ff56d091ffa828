"""Client configuration for the PKCE flow."""

from __future__ import annotations

import os
from collections.abc import Mapping
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "PKCEFLOW_"


class ClientConfig(BaseModel):
    """Identity provider and client settings shared by every flow step."""

    model_config = ConfigDict(frozen=True)

    idp_url: str
    client_id: str = Field(min_length=1)
    redirect_uri: str

    login_path: str = "/login"
    logout_path: str = "/logout"
    scope: str = "openid"
    timeout: float = Field(default=30.0, gt=0)

    # Raw query/body values, for IdP integrations relying on them
    encode_logout_params: bool = True
    encode_token_form: bool = True

    # Only used by the default in-memory session store
    verifier_ttl_seconds: float | None = Field(default=None, gt=0)

    @field_validator("idp_url")
    @classmethod
    def validate_idp_url(cls, v: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"idp_url must be an absolute http(s) URL: {v}")
        return v.rstrip("/")

    @field_validator("login_path", "logout_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"Path must start with '/': {v}")
        return v

    @classmethod
    def from_env(
        cls, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None
    ) -> ClientConfig:
        """Load configuration from ``<prefix><FIELD>`` environment variables.

        Unset variables fall back to field defaults; pydantic parses the
        string values into the field types.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"{prefix}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls.model_validate(values)
