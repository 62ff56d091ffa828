import hashlib
import re

import pytest

from pkceflow.primitives.nonce import NonceGenerator


class TestNonceGenerator:
    async def test_nonce_is_sha256_hex_of_random_bytes(self) -> None:
        # Arrange
        generator = NonceGenerator(random_source=lambda n: b"\x00" * n)

        # Act
        nonce = await generator.generate()

        # Assert
        assert nonce == hashlib.sha256(b"\x00" * 16).hexdigest()
        assert re.fullmatch(r"[0-9a-f]{64}", nonce)

    async def test_deterministic_for_fixed_random_source(self) -> None:
        generator = NonceGenerator(random_source=lambda n: b"\x2a" * n)

        assert await generator.generate() == await generator.generate()

    async def test_draws_requested_entropy(self) -> None:
        # Arrange
        requested: list[int] = []

        def source(n: int) -> bytes:
            requested.append(n)
            return b"\x01" * n

        generator = NonceGenerator(random_source=source, entropy_bytes=32)

        # Act
        await generator.generate()

        # Assert
        assert requested == [32]

    async def test_supports_async_random_source(self) -> None:
        # Arrange
        async def source(n: int) -> bytes:
            return b"\x07" * n

        generator = NonceGenerator(random_source=source)

        # Act
        nonce = await generator.generate()

        # Assert
        assert nonce == hashlib.sha256(b"\x07" * 16).hexdigest()

    async def test_default_source_produces_fresh_values(self) -> None:
        generator = NonceGenerator()

        nonces = {await generator.generate() for _ in range(100)}

        assert len(nonces) == 100

    def test_rejects_less_than_128_bits(self) -> None:
        with pytest.raises(ValueError, match="at least 16"):
            NonceGenerator(entropy_bytes=8)

    async def test_random_source_failure_propagates(self) -> None:
        def source(n: int) -> bytes:
            raise OSError("entropy unavailable")

        generator = NonceGenerator(random_source=source)

        with pytest.raises(OSError, match="entropy unavailable"):
            await generator.generate()
