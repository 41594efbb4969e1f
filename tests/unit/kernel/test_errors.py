"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

from broker_auth.config.validation import ConfigurationError, MissingRequiredSettingError
from broker_auth.kernel.errors import (
    ApplicationError,
    AuthenticationLookupError,
    BaseError,
    InfrastructureError,
    RefreshError,
    UnsupportedOperationError,
    UnsupportedRequestError,
)


class TestBaseError:
    def test_to_dict(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_cause_is_chained(self) -> None:
        cause = ValueError("original")
        err = BaseError("wrapper", cause=cause)
        assert err.__cause__ is cause
        assert "original" in err.to_dict()["cause"]

    def test_str_carries_code_and_cause(self) -> None:
        assert str(BaseError("boom")) == "[base_error] boom"
        err = RefreshError("acl", cause=OSError("refused"))
        assert str(err) == "[refresh_failed] Refresh of 'acl' snapshot failed: OSError('refused')"


class TestHierarchy:
    def test_application_errors(self) -> None:
        assert issubclass(UnsupportedRequestError, ApplicationError)
        assert issubclass(UnsupportedOperationError, ApplicationError)
        assert issubclass(AuthenticationLookupError, ApplicationError)

    def test_refresh_error(self) -> None:
        err = RefreshError("acl", cause=OSError("refused"))
        assert isinstance(err, InfrastructureError)
        assert err.snapshot == "acl"
        assert err.code == "refresh_failed"
        assert "acl" in err.message

    def test_unsupported_request_carries_pattern_type(self) -> None:
        err = UnsupportedRequestError("nope", pattern_type="PREFIXED")
        assert err.pattern_type == "PREFIXED"
        assert err.code == "unsupported_request"

    def test_configuration_errors(self) -> None:
        err = MissingRequiredSettingError("table")
        assert isinstance(err, ConfigurationError)
        assert isinstance(err, BaseError)
        assert err.setting_name == "table"

    def test_lookup_error_message(self) -> None:
        assert "alice" in AuthenticationLookupError("alice").message
