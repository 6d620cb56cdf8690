"""Redacting holder for credential material.

Private keys and access tokens read from secret resources are wrapped on
read and only unwrapped at the point of use (signing a JWT, building an
Authorization header). Every incidental rendering path (``str``, ``repr``,
f-strings, pydantic serialization, ``json.dumps`` with ``json_default``,
structlog output) yields ``[REDACTED]``; pickling is refused.

Usage:
    from infrastructure.security import wrap, reveal

    token = wrap(secret.data["access-token"])
    client = WebClient(token=reveal_str(token))
"""

import hmac
from typing import Any, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

REDACTED = "[REDACTED]"


class SecretBytes:
    """Opaque wrapper around secret bytes."""

    __slots__ = ("_value",)

    def __init__(self, value: Union[bytes, str]):
        if isinstance(value, str):
            value = value.encode("utf-8")
        self._value = bytes(value)

    def __str__(self) -> str:
        return REDACTED

    def __repr__(self) -> str:
        return REDACTED

    def __format__(self, format_spec: str) -> str:
        return REDACTED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretBytes):
            return NotImplemented
        return hmac.compare_digest(self._value, other._value)

    def __hash__(self) -> int:
        return hash((SecretBytes, len(self._value)))

    def __len__(self) -> int:
        return len(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __reduce_ex__(self, protocol):
        raise TypeError("SecretBytes cannot be pickled")

    def __copy__(self) -> "SecretBytes":
        return self

    def __deepcopy__(self, memo) -> "SecretBytes":
        return self

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda _: REDACTED, when_used="always"
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> "SecretBytes":
        if isinstance(value, SecretBytes):
            return value
        if isinstance(value, (bytes, str)):
            return cls(value)
        raise ValueError("secret value must be bytes or str")


def wrap(value: Union[bytes, str]) -> SecretBytes:
    """Wrap raw secret material."""
    return SecretBytes(value)


def reveal(secret: SecretBytes) -> bytes:
    """Return the exact wrapped bytes."""
    return secret._value


def reveal_str(secret: SecretBytes, encoding: str = "utf-8") -> str:
    """Return the wrapped bytes decoded as text."""
    return secret._value.decode(encoding)


def json_default(value: Any) -> str:
    """``default`` hook for ``json.dumps`` that renders secrets as the marker.

        json.dumps({"token": secret}, default=json_default)
    """
    if isinstance(value, SecretBytes):
        return REDACTED
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
