"""Authorization callback handling on the redirect-back page.

Recovers the code verifier stored under the returned state, consumes it,
and exchanges the authorization code for tokens.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from pkceflow.models.errors import (
    AuthorizationDeniedError,
    MissingParameterError,
    MissingVerifierError,
)
from pkceflow.models.flow import AuthorizationResponse, CallbackParams
from pkceflow.models.tokens import Auth, TokenExchangeRequest
from pkceflow.services.tokens import TokenExchanger
from pkceflow.storage import SessionStore, resolve

logger = logging.getLogger(__name__)


class CallbackHandler:
    """Completes a login attempt started by AuthorizationRedirector.

    Each stored verifier is single-use: it is removed as soon as it is
    read, whether or not the exchange that follows succeeds. A replayed
    callback URL or a retry after a failed exchange therefore fails with
    MissingVerifierError and a new login redirect is needed.
    """

    def __init__(self, store: SessionStore, token_exchanger: TokenExchanger):
        self._store = store
        self._token_exchanger = token_exchanger

    async def handle_callback(self, callback_url: str, params: CallbackParams) -> Auth:
        """Handle the identity provider's redirect back to the client.

        Args:
            callback_url: Full URL of the redirect-back page, carrying
                ``code`` and ``state`` in its query string
            params: Client settings used for the token exchange

        Returns:
            Auth: Validated tokens

        Raises:
            AuthorizationDeniedError: If the identity provider returned an error
            MissingParameterError: If code or state is absent
            MissingVerifierError: If no verifier is stored for the state
            TransportError: If the token request fails
            SchemaError: If the token response is malformed
        """
        auth_response = self.parse_callback_url(callback_url)

        if auth_response.is_error():
            # The attempt cannot complete, so its verifier is discarded
            if auth_response.state:
                await resolve(self._store.delete(auth_response.state))
            logger.warning(
                f"Authorization callback contained error: {auth_response.error} - "
                f"{auth_response.error_description}"
            )
            raise AuthorizationDeniedError(
                auth_response.error, auth_response.error_description
            )

        if not auth_response.state or not auth_response.code:
            raise MissingParameterError("Missing state or code")

        code_verifier = await resolve(self._store.get(auth_response.state))
        await resolve(self._store.delete(auth_response.state))

        if not code_verifier:
            raise MissingVerifierError(
                "No code verifier stored for state; it expired, was already "
                "used, or the state was not issued by this client"
            )

        logger.debug("Recovered code verifier for callback state")

        return await self._token_exchanger.exchange_code(
            TokenExchangeRequest(
                code=auth_response.code,
                code_verifier=code_verifier,
                idp_url=params.idp_url,
                client_id=params.client_id,
                redirect_uri=params.redirect_uri,
            )
        )

    @staticmethod
    def parse_callback_url(callback_url: str) -> AuthorizationResponse:
        """Parse the callback query into an AuthorizationResponse."""
        query_params = parse_qs(urlparse(callback_url).query)

        def get_single_param(key: str) -> str | None:
            values = query_params.get(key, [])
            return values[0] if values else None

        return AuthorizationResponse(
            code=get_single_param("code"),
            state=get_single_param("state"),
            error=get_single_param("error"),
            error_description=get_single_param("error_description"),
        )
