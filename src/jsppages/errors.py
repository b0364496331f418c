"""jsppages exception hierarchy.

Shared across the path grammar, the container, and the repository so
every module raises and catches the same types.

A page that cannot be found is never an error: lookups return ``None``.
"""

from dataclasses import dataclass


class JspPagesError(Exception):
    """Base for all jsppages-specific errors."""


class ConfigurationError(JspPagesError):
    """Raised when a context or attribute is set up incorrectly."""


@dataclass(frozen=True, slots=True)
class ValidationError(JspPagesError, ValueError):
    """A value does not satisfy the page-path grammar.

    Carries the rejected value and a short reason for diagnostics.
    """

    value: object
    reason: str

    def __str__(self) -> str:
        return f"Invalid path {self.value!r}: {self.reason}"


class AttributeTypeError(JspPagesError, TypeError):
    """A context attribute holds a value of an unexpected type."""


class ContextDestroyedError(JspPagesError):
    """The hosting context has already been torn down."""
