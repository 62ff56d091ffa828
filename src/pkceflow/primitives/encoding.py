"""Base64url encoding without padding (RFC 4648 Section 5, RFC 7636 Appendix A)."""

from __future__ import annotations

import base64
import binascii


def base64url_encode(data: bytes) -> str:
    """Encode bytes as base64url with the trailing ``=`` padding removed."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(value: str) -> bytes:
    """Decode an unpadded base64url string.

    Raises:
        ValueError: If the value is not valid base64url
    """
    # b64decode only validates after translating altchars
    if "+" in value or "/" in value:
        raise ValueError("Invalid base64url value: contains '+' or '/'")

    padding = "=" * (-len(value) % 4)
    try:
        return base64.b64decode(value + padding, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64url value: {e}") from e
