"""PKCE authorization code client.

Wires one ClientConfig to the challenge, redirect, callback and token
exchange components to provide the complete login flow.
"""

from __future__ import annotations

import logging

import httpx

from pkceflow.config import ClientConfig
from pkceflow.models.flow import (
    AuthorizationRequestParams,
    CallbackParams,
    LogoutRequestParams,
)
from pkceflow.models.security import Challenge
from pkceflow.models.tokens import Auth, TokenExchangeRequest
from pkceflow.navigation import BrowserNavigator, Navigator
from pkceflow.primitives.nonce import NonceGenerator, RandomSource
from pkceflow.services.callback import CallbackHandler
from pkceflow.services.challenge import ChallengeBuilder
from pkceflow.services.redirect import AuthorizationRedirector
from pkceflow.services.tokens import TokenExchanger
from pkceflow.storage import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


class PKCEClient:
    """High-level client for the OAuth 2.0 authorization code flow with PKCE.

    A login is two calls separated by a redirect round-trip through the
    identity provider::

        async with PKCEClient(config) as client:
            await client.redirect_to_login()
            ...
            auth = await client.handle_callback(callback_url)

    Both calls must share the session store, so the same client (or the
    same store) has to serve the login and the callback.
    """

    def __init__(
        self,
        config: ClientConfig,
        store: SessionStore | None = None,
        navigator: Navigator | None = None,
        http_client: httpx.AsyncClient | None = None,
        random_source: RandomSource | None = None,
    ):
        """Initialize the client.

        Args:
            config: Identity provider and client settings
            store: Session store for pending verifiers. Defaults to an
                in-memory store honoring ``config.verifier_ttl_seconds``.
            navigator: Navigation capability. Defaults to the system browser.
            http_client: HTTP client for the token endpoint
            random_source: Secure random source for nonces
        """
        self.config = config
        if store is None:
            store = InMemorySessionStore(ttl_seconds=config.verifier_ttl_seconds)
        self.store = store
        self.navigator = navigator or BrowserNavigator()

        self.challenge_builder = ChallengeBuilder(NonceGenerator(random_source))
        self.redirector = AuthorizationRedirector(
            self.store,
            self.navigator,
            challenge_builder=self.challenge_builder,
            encode_logout_params=config.encode_logout_params,
        )
        self.token_exchanger = TokenExchanger(
            http_client=http_client,
            timeout=config.timeout,
            encode_form=config.encode_token_form,
        )
        self.callback_handler = CallbackHandler(self.store, self.token_exchanger)

    async def get_challenge(self) -> Challenge:
        """Generate a challenge without storing it or navigating."""
        return await self.challenge_builder.get_challenge()

    async def redirect_to_login(
        self, path: str | None = None, scope: str | None = None
    ) -> Challenge:
        """Persist a new code verifier and navigate to the login page."""
        params = AuthorizationRequestParams(
            idp_url=self.config.idp_url,
            client_id=self.config.client_id,
            redirect_uri=self.config.redirect_uri,
            path=path or self.config.login_path,
            scope=scope or self.config.scope,
        )
        return await self.redirector.redirect_to_login(params)

    async def redirect_to_logout(self, logout_uri: str, path: str | None = None) -> str:
        """Navigate to the logout page, returning the URL used."""
        params = LogoutRequestParams(
            idp_url=self.config.idp_url,
            client_id=self.config.client_id,
            logout_uri=logout_uri,
            path=path or self.config.logout_path,
        )
        return await self.redirector.redirect_to_logout(params)

    async def exchange_code(self, code: str, code_verifier: str) -> Auth:
        """Exchange a code for tokens with an explicitly supplied verifier."""
        return await self.token_exchanger.exchange_code(
            TokenExchangeRequest(
                code=code,
                code_verifier=code_verifier,
                idp_url=self.config.idp_url,
                client_id=self.config.client_id,
                redirect_uri=self.config.redirect_uri,
            )
        )

    async def handle_callback(self, callback_url: str) -> Auth:
        """Finish the login from the URL of the redirect-back page."""
        return await self.callback_handler.handle_callback(
            callback_url,
            CallbackParams(
                idp_url=self.config.idp_url,
                client_id=self.config.client_id,
                redirect_uri=self.config.redirect_uri,
            ),
        )

    async def close(self) -> None:
        """Close service connections."""
        await self.token_exchanger.close()

    async def __aenter__(self) -> PKCEClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
