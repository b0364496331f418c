"""Dispatch handles for page resources.

A ``RequestDispatcher`` binds one resource of one context to that
context's renderer.  ``DispatchTarget`` is what a repository lookup
returns: the resolved resource path together with its handle, so a
caller never dispatches on a bare path.

Rendering itself is the renderer's business; a dispatcher only packages
the call as an ``Invocation`` and passes the result back unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jsppages.errors import ContextDestroyedError

if TYPE_CHECKING:
    from jsppages._internal.types import Renderer
    from jsppages.container import LocalContext

logger = logging.getLogger("jsppages.dispatch")


class DispatchMode(StrEnum):
    """How control passes to the target resource."""

    FORWARD = "forward"
    INCLUDE = "include"


@dataclass(frozen=True, slots=True)
class Invocation:
    """A single dispatch, as seen by the renderer.

    Attributes:
        resource_path: Context-relative resource path (e.g. ``/blog/post1.jsp``).
        file: Filesystem location of the resource.
        request: The caller's request object, passed through untouched.
        mode: Whether this is a forward or an include.
    """

    resource_path: str
    file: Path
    request: Any
    mode: DispatchMode


class RequestDispatcher:
    """Forwards or includes a request to one resource of a context.

    Acquired through ``LocalContext.get_request_dispatcher()``.  The handle
    remains tied to the context that produced it: once that context is
    destroyed, dispatching raises ``ContextDestroyedError``.
    """

    __slots__ = ("_context", "_renderer", "file", "path")

    def __init__(
        self,
        context: LocalContext,
        path: str,
        file: Path,
        renderer: Renderer,
    ) -> None:
        self._context = context
        self._renderer = renderer
        self.path = path
        self.file = file

    def forward(self, request: Any) -> Any:
        """Hand the request over to the resource and return its output."""
        return self._dispatch(request, DispatchMode.FORWARD)

    def include(self, request: Any) -> Any:
        """Render the resource as part of an enclosing response."""
        return self._dispatch(request, DispatchMode.INCLUDE)

    def _dispatch(self, request: Any, mode: DispatchMode) -> Any:
        if self._context.destroyed:
            msg = f"Cannot {mode} to {self.path!r}: context has been destroyed"
            raise ContextDestroyedError(msg)
        logger.debug("%s %s", mode, self.path)
        return self._renderer(
            Invocation(
                resource_path=self.path,
                file=self.file,
                request=request,
                mode=mode,
            )
        )

    def __repr__(self) -> str:
        return f"<RequestDispatcher {self.path}>"


@dataclass(frozen=True, slots=True)
class DispatchTarget:
    """A resolved page: the resource path and the handle that dispatches to it.

    Produced fresh by every successful lookup; never cached.
    """

    resource_path: str
    dispatcher: RequestDispatcher

    def forward(self, request: Any) -> Any:
        """Forward *request* to the resource."""
        return self.dispatcher.forward(request)

    def include(self, request: Any) -> Any:
        """Include the resource's output for *request*."""
        return self.dispatcher.include(request)
