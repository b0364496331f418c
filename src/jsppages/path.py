"""Hierarchical page paths.

A ``PagePath`` is the validated, slash-delimited address of a page or
directory within a repository's namespace.  Construction enforces the
grammar once; everything downstream trusts it.

Grammar:

- begins with ``/``
- no empty segments (``//``), except that ``/`` alone is the root
- no ``.`` or ``..`` segments
- no NUL characters
- a single trailing ``/`` marks a directory

Non-ASCII characters are allowed and left untouched.
"""

from dataclasses import dataclass
from typing import ClassVar

from jsppages.errors import ValidationError


def _check(value: object) -> str | None:
    """Return the reason *value* is not a valid path, or ``None``."""
    if not isinstance(value, str):
        return f"expected str, got {type(value).__name__}"
    if not value:
        return "must not be empty"
    if not value.startswith("/"):
        return "must start with '/'"
    if "\x00" in value:
        return "must not contain NUL"
    if "//" in value:
        return "must not contain empty segments"
    # The leading "/" always yields an empty first segment; a trailing
    # "/" yields an empty last one.
    for segment in value.split("/")[1:]:
        if segment in (".", ".."):
            return f"must not contain {segment!r} segments"
    return None


@dataclass(frozen=True, slots=True)
class PagePath:
    """An immutable, validated page path.

    Usage::

        path = PagePath("/blog/post1")
        str(path)           # "/blog/post1"
        path.is_directory   # False

    Raises:
        ValidationError: If *value* does not satisfy the path grammar.
    """

    value: str

    ROOT: ClassVar["PagePath"]

    def __post_init__(self) -> None:
        reason = _check(self.value)
        if reason is not None:
            raise ValidationError(self.value, reason)

    @classmethod
    def value_of(cls, value: "PagePath | str") -> "PagePath":
        """Return *value* as a ``PagePath``, validating strings."""
        if isinstance(value, PagePath):
            return value
        if value == "/":
            return cls.ROOT
        return cls(value)

    @property
    def is_directory(self) -> bool:
        """Whether the path names a directory (ends with ``/``)."""
        return self.value.endswith("/")

    def __str__(self) -> str:
        return self.value


PagePath.ROOT = PagePath("/")
