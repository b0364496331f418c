"""The hosting context.

``ServletContext`` is the narrow surface the repository needs from its
host: per-application attribute storage, resource lookup, and dispatcher
acquisition.  ``LocalContext`` implements it in-process over a document
root on disk.

Usage::

    context = LocalContext("./site", renderer=render_page)

    @context.on_startup
    def warm():
        ...

    context.start()
    ...
    context.destroy()

Thread safety:
    Attribute storage is guarded by a Lock, and ``set_attribute_if_absent``
    is atomic: concurrent callers all observe the same stored value.
    ``start()`` uses a Lock + double-check so hooks run exactly once.
    Resource and dispatcher lookups hold no lock.
"""

import errno
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from jsppages._internal.types import Hook, Renderer
from jsppages.config import ContextConfig
from jsppages.dispatch import Invocation, RequestDispatcher
from jsppages.errors import ContextDestroyedError

logger = logging.getLogger("jsppages.container")


class ServletContext(Protocol):
    """What a page repository requires from its hosting context."""

    @property
    def config(self) -> ContextConfig: ...

    def get_attribute(self, name: str) -> Any: ...

    def set_attribute(self, name: str, value: Any) -> None: ...

    def set_attribute_if_absent(self, name: str, value: Any) -> Any: ...

    def remove_attribute(self, name: str) -> None: ...

    def get_resource(self, path: str) -> Path | None: ...

    def get_request_dispatcher(self, path: str) -> RequestDispatcher | None: ...


def read_resource(invocation: Invocation) -> str:
    """Default renderer: the resource's text, unprocessed."""
    return invocation.file.read_text(encoding="utf-8")


class LocalContext:
    """An in-process application context rooted at a directory.

    Attributes live for the lifetime of the context and are dropped by
    ``destroy()``, which takes any per-context registries with them.
    """

    __slots__ = (
        "_attributes",
        "_destroyed",
        "_document_root",
        "_lock",
        "_renderer",
        "_shutdown_hooks",
        "_start_lock",
        "_started",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        document_root: str | Path,
        *,
        config: ContextConfig | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.config: ContextConfig = config or ContextConfig()
        self._document_root = Path(document_root).resolve()
        self._renderer: Renderer = renderer or read_resource
        self._attributes: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._start_lock = threading.Lock()
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._started = False
        self._destroyed = False

    @property
    def document_root(self) -> Path:
        return self._document_root

    @property
    def started(self) -> bool:
        return self._started

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # -- Attributes --

    def get_attribute(self, name: str) -> Any:
        """Return the attribute stored under *name*, or ``None``."""
        with self._lock:
            return self._attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        """Store *value* under *name*; ``None`` removes the attribute."""
        with self._lock:
            if value is None:
                self._attributes.pop(name, None)
            else:
                self._attributes[name] = value

    def set_attribute_if_absent(self, name: str, value: Any) -> Any:
        """Store *value* unless *name* is already set.

        Returns whichever value is stored once the call completes.
        """
        with self._lock:
            return self._attributes.setdefault(name, value)

    def remove_attribute(self, name: str) -> None:
        with self._lock:
            self._attributes.pop(name, None)

    def attribute_names(self) -> list[str]:
        with self._lock:
            return sorted(self._attributes)

    # -- Resources --

    def get_resource(self, path: str) -> Path | None:
        """Locate a context-relative resource file.

        Returns ``None`` for relative paths, directories, missing files,
        and anything that resolves outside the document root.
        """
        if not path.startswith("/"):
            return None
        try:
            file_path = (self._document_root / path.lstrip("/")).resolve()
            if not file_path.is_relative_to(self._document_root):
                logger.debug("Rejected resource outside document root: %s", path)
                return None
            if not file_path.is_file():
                return None
        except OSError as exc:
            # A name no filesystem can hold cannot exist.
            if exc.errno == errno.ENAMETOOLONG:
                return None
            raise
        return file_path

    def get_request_dispatcher(self, path: str) -> RequestDispatcher | None:
        """Return a dispatcher for *path*, or ``None`` if none can be produced."""
        if self._destroyed or not path.startswith("/"):
            return None
        file_path = self.get_resource(path)
        if file_path is None:
            return None
        return RequestDispatcher(self, path, file_path, self._renderer)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a startup hook via decorator.

        Hooks run in registration order when ``start()`` is first called.
        """
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a shutdown hook via decorator.

        Hooks run in registration order during ``destroy()``, before the
        attributes are dropped.
        """
        self._shutdown_hooks.append(func)
        return func

    def start(self) -> None:
        """Run startup hooks once.  Later calls are no-ops.

        If a hook raises, the context stays unstarted and the error
        propagates; a later ``start()`` runs every hook again.  Hooks must
        not call ``start()`` themselves.
        """
        if self._started:
            return
        with self._start_lock:
            if self._destroyed:
                msg = f"Context {self.config.display_name!r} has been destroyed"
                raise ContextDestroyedError(msg)
            if self._started:
                return
            # Hooks may touch attributes, so they run outside the attribute lock.
            for hook in list(self._startup_hooks):
                hook()
            self._started = True
        logger.debug("Context %s started", self)

    def destroy(self) -> None:
        """Run shutdown hooks and drop every attribute."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            hooks = list(self._shutdown_hooks)
        try:
            for hook in hooks:
                hook()
        finally:
            with self._lock:
                self._attributes.clear()
            logger.debug("Context %s destroyed", self)

    def __repr__(self) -> str:
        return f"<LocalContext {self.config.display_name} {self._document_root}>"
