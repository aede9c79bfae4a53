"""Tests for exception hierarchy."""

import pytest

from freeflow.core import (
    ConfigurationError,
    FreeFlowError,
    SessionError,
    ValidationError,
)


class TestExceptionHierarchy:
    def test_all_exceptions_inherit_from_freeflowerror(self):
        for exc_class in (ConfigurationError, ValidationError, SessionError):
            assert issubclass(exc_class, FreeFlowError)

    def test_freeflowerror_is_exception(self):
        assert issubclass(FreeFlowError, Exception)


class TestExceptionMessages:
    def test_freeflowerror_with_message(self):
        with pytest.raises(FreeFlowError, match="test error"):
            raise FreeFlowError("test error")

    def test_session_error_caught_as_base(self):
        with pytest.raises(FreeFlowError, match="finished"):
            raise SessionError("Dive already finished")
