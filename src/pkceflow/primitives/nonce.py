"""High-entropy nonce generation for the state and code verifier.

Randomness comes from the operating system CSPRNG by default. The raw
bytes are hashed so the nonce has a fixed length and never exposes the
random source output directly.
"""

from __future__ import annotations

import hashlib
import inspect
import secrets
from collections.abc import Awaitable, Callable

RandomSource = Callable[[int], bytes | Awaitable[bytes]]

MIN_ENTROPY_BYTES = 16


class NonceGenerator:
    """Generates hex-encoded SHA-256 nonces from a secure random source.

    The same generator produces both the ``state`` (a CSRF token) and the
    PKCE ``code_verifier`` (a secret), so the random source must be
    cryptographically secure. A substitute source can be injected to make
    output deterministic in tests.
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        entropy_bytes: int = MIN_ENTROPY_BYTES,
    ):
        """Initialize the nonce generator.

        Args:
            random_source: Callable returning ``n`` random bytes, or an
                awaitable of them. Defaults to ``secrets.token_bytes``.
            entropy_bytes: Random bytes drawn per nonce (at least 16)

        Raises:
            ValueError: If entropy_bytes is below 128 bits
        """
        if entropy_bytes < MIN_ENTROPY_BYTES:
            raise ValueError(
                f"entropy_bytes must be at least {MIN_ENTROPY_BYTES}, "
                f"got {entropy_bytes}"
            )
        self._random_source = random_source or secrets.token_bytes
        self.entropy_bytes = entropy_bytes

    async def generate(self) -> str:
        """Generate a nonce.

        Returns:
            64-character lowercase hex SHA-256 digest of fresh random bytes
        """
        random_bytes = self._random_source(self.entropy_bytes)
        if inspect.isawaitable(random_bytes):
            random_bytes = await random_bytes

        return hashlib.sha256(random_bytes).hexdigest()
