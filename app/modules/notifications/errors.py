"""Provider error taxonomy.

Every failure raised by provider resolution or delivery is a
``ProviderError`` carrying one of four codes. Nothing else escapes an
adapter; the dispatcher records the code on the binding's outcome.
"""

from enum import Enum


class ProviderErrorCode(str, Enum):
    """Classification of provider failures."""

    INVALID_PROVIDER_SPEC = "InvalidProviderSpec"
    NOT_FOUND_PRIVATE_KEY = "NotFoundPrivateKey"
    FAILED_VALIDATION = "FailedValidation"
    RUNTIME_ERROR = "RuntimeError"


class ProviderError(Exception):
    """Coded provider failure.

    Equality and hashing consider the code only, so callers can compare
    against a bare constructor result:

        assert err == ProviderError.failed_validation()

    Attributes:
        code: ProviderErrorCode classification
        message: Human readable detail, never containing secret material
    """

    def __init__(self, code: ProviderErrorCode, message: str = ""):
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"ProviderError(code={self.code.value!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProviderError):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    @property
    def retryable(self) -> bool:
        """Whether a later attempt could succeed without a config change."""
        return self.code == ProviderErrorCode.RUNTIME_ERROR

    @classmethod
    def invalid_provider_spec(cls, message: str = "") -> "ProviderError":
        return cls(ProviderErrorCode.INVALID_PROVIDER_SPEC, message)

    @classmethod
    def not_found_private_key(cls, message: str = "") -> "ProviderError":
        return cls(ProviderErrorCode.NOT_FOUND_PRIVATE_KEY, message)

    @classmethod
    def failed_validation(cls, message: str = "") -> "ProviderError":
        return cls(ProviderErrorCode.FAILED_VALIDATION, message)

    @classmethod
    def runtime_error(cls, message: str = "") -> "ProviderError":
        return cls(ProviderErrorCode.RUNTIME_ERROR, message)
