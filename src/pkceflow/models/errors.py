"""Exception hierarchy for the PKCE authorization code flow.

Each failure mode of the flow has its own exception type so callers can
tell a missing callback parameter from a replayed state, a transport
failure, or a malformed token response.
"""

from __future__ import annotations

from typing import Any


class PKCEFlowError(Exception):
    """Base exception for all PKCE flow errors."""

    pass


class MissingParameterError(PKCEFlowError):
    """Raised when the callback URL lacks the code or state parameter."""

    pass


class AuthorizationDeniedError(MissingParameterError):
    """Raised when the identity provider redirected back with an error.

    No authorization code is delivered in this case, so it is a special
    case of a missing parameter.
    """

    def __init__(
        self, error: str, error_description: str | None = None
    ) -> None:
        self.error = error
        self.error_description = error_description
        message = f"Authorization failed: {error}"
        if error_description:
            message += f" ({error_description})"
        super().__init__(message)


class MissingVerifierError(PKCEFlowError):
    """Raised when no code verifier is stored for the callback state.

    The entry has expired, was already consumed, or the state was forged.
    """

    pass


class TransportError(PKCEFlowError):
    """Raised when the token endpoint is unreachable or returns non-2xx."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SchemaError(PKCEFlowError):
    """Raised when a token response does not conform to the Auth shape."""

    def __init__(self, message: str, issues: list[str] | None = None) -> None:
        super().__init__(message)
        self.issues = issues or []
