"""Tests for jsppages.errors — exception hierarchy and error messages."""

import pytest

from jsppages.errors import (
    AttributeTypeError,
    ConfigurationError,
    ContextDestroyedError,
    JspPagesError,
    ValidationError,
)


class TestHierarchy:
    def test_configuration_error_is_jsppages_error(self) -> None:
        assert issubclass(ConfigurationError, JspPagesError)

    def test_validation_error_is_value_error(self) -> None:
        assert issubclass(ValidationError, JspPagesError)
        assert issubclass(ValidationError, ValueError)

    def test_attribute_type_error_is_type_error(self) -> None:
        assert issubclass(AttributeTypeError, JspPagesError)
        assert issubclass(AttributeTypeError, TypeError)

    def test_context_destroyed_is_jsppages_error(self) -> None:
        assert issubclass(ContextDestroyedError, JspPagesError)


class TestValidationError:
    def test_value_and_reason(self) -> None:
        err = ValidationError("blog", "must start with '/'")
        assert err.value == "blog"
        assert err.reason == "must start with '/'"

    def test_str(self) -> None:
        err = ValidationError("blog", "must start with '/'")
        assert str(err) == "Invalid path 'blog': must start with '/'"

    def test_frozen(self) -> None:
        err = ValidationError("blog", "bad")
        with pytest.raises(AttributeError):
            err.reason = "other"  # type: ignore[misc]

    def test_catchable_as_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise ValidationError("", "must not be empty")
