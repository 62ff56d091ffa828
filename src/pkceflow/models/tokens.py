"""Token exchange models.

Contains the authorization code exchange request and the validated
token endpoint response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, FiniteFloat, StrictInt


@dataclass(frozen=True)
class TokenExchangeRequest:
    """Authorization code exchange parameters (RFC 6749 Section 4.1.3).

    Includes the PKCE code_verifier recovered from the session store
    (RFC 7636 Section 4.5).
    """

    code: str
    code_verifier: str
    idp_url: str
    client_id: str
    redirect_uri: str

    grant_type: str = "authorization_code"
    token_path: str = "/oauth2/token"

    @property
    def token_endpoint(self) -> str:
        return f"{self.idp_url}{self.token_path}"

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for an application/x-www-form-urlencoded body.

        Returns:
            Ordered dictionary suitable for the httpx ``data`` parameter
        """
        return {
            "grant_type": self.grant_type,
            "client_id": self.client_id,
            "code": self.code,
            "code_verifier": self.code_verifier,
            "redirect_uri": self.redirect_uri,
        }

    def to_raw_form_body(self) -> str:
        """Join the form data as ``key=value`` pairs without encoding values."""
        return "&".join(f"{k}={v}" for k, v in self.to_form_data().items())


class Auth(BaseModel):
    """Successful token endpoint response.

    Strict: values are never coerced, so ``"60"`` is not a valid
    ``expires_in`` and ``"bearer"`` is not a valid ``token_type``. NaN and
    infinite values are rejected. Unknown keys in the response are ignored.
    """

    model_config = ConfigDict(strict=True, frozen=True, allow_inf_nan=False)

    access_token: str
    expires_in: StrictInt | FiniteFloat  # Seconds
    id_token: str
    refresh_token: str
    token_type: Literal["Bearer"] = "Bearer"
