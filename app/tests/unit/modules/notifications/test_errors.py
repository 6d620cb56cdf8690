"""Unit tests for the provider error taxonomy."""

import pytest

from modules.notifications.errors import ProviderError, ProviderErrorCode


@pytest.mark.unit
class TestProviderError:
    def test_str_includes_code_and_message(self):
        err = ProviderError.failed_validation("missing annotation x")
        assert str(err) == "FailedValidation: missing annotation x"

    def test_equality_compares_code_only(self):
        assert ProviderError.runtime_error("a") == ProviderError.runtime_error("b")
        assert ProviderError.runtime_error("a") != ProviderError.failed_validation("a")
        assert hash(ProviderError.runtime_error("a")) == hash(
            ProviderError.runtime_error("b")
        )

    @pytest.mark.parametrize(
        "factory,code",
        [
            (ProviderError.invalid_provider_spec, ProviderErrorCode.INVALID_PROVIDER_SPEC),
            (ProviderError.not_found_private_key, ProviderErrorCode.NOT_FOUND_PRIVATE_KEY),
            (ProviderError.failed_validation, ProviderErrorCode.FAILED_VALIDATION),
            (ProviderError.runtime_error, ProviderErrorCode.RUNTIME_ERROR),
        ],
    )
    def test_named_constructors(self, factory, code):
        assert factory("m").code == code

    def test_only_runtime_errors_are_retryable(self):
        assert ProviderError.runtime_error().retryable
        assert not ProviderError.invalid_provider_spec().retryable
        assert not ProviderError.not_found_private_key().retryable
        assert not ProviderError.failed_validation().retryable

    def test_is_raisable(self):
        with pytest.raises(ProviderError) as exc_info:
            raise ProviderError.invalid_provider_spec("bad")
        assert exc_info.value.code == ProviderErrorCode.INVALID_PROVIDER_SPEC
