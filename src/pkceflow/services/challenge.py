"""PKCE challenge construction (RFC 7636 Section 4.1-4.2)."""

from __future__ import annotations

import asyncio
import hashlib

from pkceflow.models.security import Challenge
from pkceflow.primitives.encoding import base64url_encode
from pkceflow.primitives.nonce import NonceGenerator


def compute_code_challenge(code_verifier: str) -> str:
    """Derive the S256 code challenge: BASE64URL(SHA256(ASCII(code_verifier)))."""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64url_encode(digest)


class ChallengeBuilder:
    """Builds a fresh Challenge for each login attempt.

    Touches neither storage nor the network, so it can be used and tested
    on its own.
    """

    def __init__(self, nonce_generator: NonceGenerator | None = None):
        self._nonce_generator = nonce_generator or NonceGenerator()

    async def get_challenge(self) -> Challenge:
        """Generate state and code verifier, then derive the code challenge.

        Returns:
            Challenge: Immutable parameters for one authorization attempt
        """
        state, code_verifier = await asyncio.gather(
            self._nonce_generator.generate(),
            self._nonce_generator.generate(),
        )

        return Challenge(
            state=state,
            code_verifier=code_verifier,
            code_challenge=compute_code_challenge(code_verifier),
        )
