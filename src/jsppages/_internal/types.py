"""Shared type aliases used across jsppages modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Renderer — receives an Invocation and produces the dispatched output
Renderer: TypeAlias = Callable[..., Any]

# Lifecycle hook — called with no arguments on start-up or shut-down
Hook: TypeAlias = Callable[[], Any]
