"""Structural validation of token endpoint responses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from pkceflow.models.errors import SchemaError
from pkceflow.models.tokens import Auth


def flatten_issues(errors: Sequence[Mapping[str, Any]]) -> list[str]:
    """Render pydantic errors as ``<path>: <message>`` strings."""
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in errors
    ]


class AuthResponseValidator:
    """Narrows a raw token endpoint response to an Auth.

    Validation is structural only: field types and the token type enum.
    Token signatures are not checked.
    """

    def validate(self, raw: Any) -> Auth:
        """Validate a decoded token response.

        Args:
            raw: Decoded JSON body of the token endpoint response

        Returns:
            Auth: The response, unchanged apart from dropped unknown keys

        Raises:
            SchemaError: If the response does not have the Auth shape
        """
        if not isinstance(raw, Mapping):
            raise SchemaError(
                "Returned auth data does not conform to schema: "
                f"expected an object, got {type(raw).__name__}",
                issues=[f"expected an object, got {type(raw).__name__}"],
            )

        try:
            return Auth.model_validate(dict(raw))
        except ValidationError as e:
            issues = flatten_issues(e.errors())
            numbered = ", ".join(
                f"{index}. {issue}" for index, issue in enumerate(issues, start=1)
            )
            raise SchemaError(
                f"Returned auth data does not conform to schema: {numbered}",
                issues=issues,
            ) from e
