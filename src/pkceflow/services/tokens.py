"""Authorization code to token exchange (RFC 6749 Section 4.1.3).

Sends the PKCE code_verifier (RFC 7636 Section 4.5) to the token
endpoint and validates the response before handing it to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from pkceflow.models.errors import SchemaError, TransportError
from pkceflow.models.tokens import Auth, TokenExchangeRequest
from pkceflow.services.validation import AuthResponseValidator

logger = logging.getLogger(__name__)

_NO_BODY = object()


class TokenExchanger:
    """Exchanges authorization codes for tokens.

    Performs exactly one request per exchange. Retry policy belongs to the
    caller.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        encode_form: bool = True,
        validator: AuthResponseValidator | None = None,
    ):
        """Initialize the token exchanger.

        Args:
            http_client: Client to send requests with. A client is created
                and owned by the exchanger when omitted.
            timeout: HTTP request timeout in seconds for an owned client
            encode_form: Form-encode body values. When False the values are
                joined as raw ``key=value`` pairs.
            validator: Token response validator
        """
        self.timeout = timeout
        self.encode_form = encode_form
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._validator = validator or AuthResponseValidator()

    async def exchange_code(self, request: TokenExchangeRequest) -> Auth:
        """Exchange an authorization code for tokens.

        Args:
            request: Code, recovered verifier and client settings

        Returns:
            Auth: Validated token response

        Raises:
            TransportError: If the request fails or the status is not 2xx
            SchemaError: If the response body does not have the Auth shape
        """
        logger.debug(f"Exchanging authorization code at {request.token_endpoint}")

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }

        try:
            if self.encode_form:
                response = await self._http_client.post(
                    request.token_endpoint,
                    data=request.to_form_data(),
                    headers=headers,
                )
            else:
                response = await self._http_client.post(
                    request.token_endpoint,
                    content=request.to_raw_form_body(),
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error during token exchange: {e}") from e

        return self._parse_token_response(response)

    def _parse_token_response(self, response: httpx.Response) -> Auth:
        body = self._decode_body(response)

        if not response.is_success:
            serialized = response.text if body is _NO_BODY else json.dumps(body)
            logger.warning(
                f"Token exchange failed with {response.status_code}: {serialized}"
            )
            raise TransportError(
                f"Error exchanging code: {serialized}",
                status_code=response.status_code,
                body=response.text if body is _NO_BODY else body,
            )

        if body is _NO_BODY:
            raise SchemaError(
                f"Returned auth data is not JSON: {response.text[:200]}",
                issues=["expected a JSON object body"],
            )

        auth = self._validator.validate(body)
        logger.info("Token exchange successful")
        return auth

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return _NO_BODY

    async def close(self) -> None:
        """Close the HTTP client if it is owned by this exchanger."""
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> TokenExchanger:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
