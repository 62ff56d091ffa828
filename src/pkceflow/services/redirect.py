"""Login and logout redirects to the identity provider.

The login redirect persists the PKCE code verifier under the state
parameter before navigating, so the callback page can recover it after
the full round-trip through the identity provider.
"""

from __future__ import annotations

import logging

from pkceflow.models.flow import AuthorizationRequestParams, LogoutRequestParams
from pkceflow.models.security import Challenge
from pkceflow.navigation import Navigator
from pkceflow.services.challenge import ChallengeBuilder
from pkceflow.storage import SessionStore, resolve

logger = logging.getLogger(__name__)


class AuthorizationRedirector:
    """Sends the user agent to the identity provider's login or logout page."""

    def __init__(
        self,
        store: SessionStore,
        navigator: Navigator,
        challenge_builder: ChallengeBuilder | None = None,
        encode_logout_params: bool = True,
    ):
        """Initialize the redirector.

        Args:
            store: Session-scoped store receiving the code verifier
            navigator: Navigation capability of the host environment
            challenge_builder: Source of PKCE challenges
            encode_logout_params: Form-encode logout query values. Disable
                only for identity providers relying on the raw query.
        """
        self._store = store
        self._navigator = navigator
        self._challenge_builder = challenge_builder or ChallengeBuilder()
        self.encode_logout_params = encode_logout_params

    async def redirect_to_login(self, params: AuthorizationRequestParams) -> Challenge:
        """Start a login attempt and navigate to the authorization endpoint.

        Args:
            params: Identity provider and client settings

        Returns:
            Challenge: Parameters of this attempt. The user agent may already
            have left by the time this returns.

        Raises:
            Exception: Failures of the random source propagate before any
                storage write or navigation.
        """
        challenge = await self._challenge_builder.get_challenge()

        # Must be durable before navigating: the page may unload immediately
        await resolve(self._store.set(challenge.state, challenge.code_verifier))

        authorization_url = params.build_authorization_url(challenge)

        logger.debug(f"Redirecting client {params.client_id} to {params.idp_url}")

        await resolve(self._navigator.navigate(authorization_url))
        return challenge

    def build_logout_url(self, params: LogoutRequestParams) -> str:
        return params.build_logout_url(encode=self.encode_logout_params)

    async def redirect_to_logout(self, params: LogoutRequestParams) -> str:
        """Navigate to the identity provider's logout endpoint.

        No verifier round-trip is involved, so the store is not touched.

        Returns:
            The logout URL navigated to
        """
        logout_url = self.build_logout_url(params)

        logger.debug(f"Redirecting client {params.client_id} to logout")

        await resolve(self._navigator.navigate(logout_url))
        return logout_url
