"""Security-related models for the PKCE flow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Challenge:
    """PKCE parameters for a single login attempt (RFC 7636).

    ``state`` and ``code_verifier`` are generated independently.
    ``code_challenge`` is BASE64URL(SHA256(code_verifier)).
    """

    state: str
    code_verifier: str
    code_challenge: str
    code_challenge_method: str = "S256"

    def __post_init__(self) -> None:
        if self.code_challenge_method != "S256":
            raise ValueError("Only S256 code challenge method is supported")
