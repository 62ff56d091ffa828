"""Authorization flow models for the PKCE redirect round-trip.

Contains the request parameters for the login and logout redirects and
the parsed callback response.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode, urljoin

from pkceflow.models.security import Challenge


@dataclass(frozen=True)
class AuthorizationRequestParams:
    """Parameters for redirecting the user agent to the login page."""

    idp_url: str
    client_id: str
    redirect_uri: str
    path: str = "/login"
    scope: str = "openid"

    def build_authorization_url(self, challenge: Challenge) -> str:
        """Build the authorization URL for the given challenge.

        ``path`` is resolved against ``idp_url`` the way a browser resolves
        a relative reference, so an absolute path replaces any path already
        present on ``idp_url``.
        """
        params = {
            "response_type": "code",
            "scope": self.scope,
            "state": challenge.state,
            "client_id": self.client_id,
            "code_challenge": challenge.code_challenge,
            "code_challenge_method": challenge.code_challenge_method,
            "redirect_uri": self.redirect_uri,
        }

        return f"{urljoin(self.idp_url, self.path)}?{urlencode(params)}"


@dataclass(frozen=True)
class LogoutRequestParams:
    """Parameters for redirecting the user agent to the logout page."""

    idp_url: str
    client_id: str
    logout_uri: str
    path: str = "/logout"

    def build_logout_url(self, encode: bool = True) -> str:
        """Build the logout URL.

        Args:
            encode: Form-encode the query values. When False the values are
                concatenated as-is, matching IdP integrations that expect
                the raw query; values containing ``&`` or ``=`` then corrupt
                the query string.
        """
        base = f"{self.idp_url}{self.path}"
        if not encode:
            return f"{base}?client_id={self.client_id}&logout_uri={self.logout_uri}"

        query = urlencode({"client_id": self.client_id, "logout_uri": self.logout_uri})
        return f"{base}?{query}"


@dataclass(frozen=True)
class CallbackParams:
    """Client settings needed to finish the flow on the redirect-back page."""

    idp_url: str
    client_id: str
    redirect_uri: str


@dataclass(frozen=True)
class AuthorizationResponse:
    code: str | None = None
    state: str | None = None
    error: str | None = None
    error_description: str | None = None

    def is_success(self) -> bool:
        return self.error is None and self.code is not None

    def is_error(self) -> bool:
        return self.error is not None
