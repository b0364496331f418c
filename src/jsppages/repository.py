"""JSP page repository.

Maps logical page paths onto ``*.jsp`` resources of a hosting context
and hands back a dispatch target for them.  One repository exists per
(context, base path); the per-context registry lives in a context
attribute and is torn down with the context.

Lookup rules for a request path ``p`` under prefix ``x``:

- ``p`` ends with ``.inc`` -> not found (include fragments are never
  dispatched directly; the cache is not consulted)
- ``p`` ends with ``/``    -> probe ``x + p + "index.jsp"``
- otherwise                -> probe ``x + p + ".jsp"``

A missing resource, or a context that declines to produce a dispatcher,
is reported as ``None``.
"""

import logging
import threading
from collections.abc import Callable

from jsppages.attributes import ContextAttribute
from jsppages.cache import ResourceCache
from jsppages.container import ServletContext
from jsppages.dispatch import DispatchTarget
from jsppages.errors import ValidationError
from jsppages.path import PagePath

logger = logging.getLogger("jsppages.repository")

JSP_EXTENSION = ".jsp"
DIRECTORY_INDEX = "index.jsp"
INCLUDE_SUFFIX = ".inc"
SCHEME = "jsp"


class RepositoryRegistry:
    """Base path -> repository map for one context.

    Thread safety:
        Reads and inserts are short critical sections under a Lock.
        Repositories are built outside it; when two threads race on the
        same path, the first one stored wins and both get it back.
    """

    __slots__ = ("_instances", "_lock")

    def __init__(self) -> None:
        self._instances: dict[PagePath, JspPageRepository] = {}
        self._lock = threading.Lock()

    def get(self, path: PagePath) -> "JspPageRepository | None":
        with self._lock:
            return self._instances.get(path)

    def get_or_create(
        self,
        path: PagePath,
        factory: Callable[[], "JspPageRepository"],
    ) -> "JspPageRepository":
        """Return the repository for *path*, building it if absent."""
        existing = self.get(path)
        if existing is not None:
            return existing
        candidate = factory()
        with self._lock:
            winner = self._instances.setdefault(path, candidate)
        if winner is candidate:
            logger.debug("Registered repository %s", winner)
        return winner

    def paths(self) -> list[PagePath]:
        with self._lock:
            return list(self._instances)

    def repositories(self) -> list["JspPageRepository"]:
        with self._lock:
            return list(self._instances.values())

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)


_REGISTRY: ContextAttribute[RepositoryRegistry] = ContextAttribute(
    f"{__name__}.JspPageRepository.instances",
    RepositoryRegistry,
    factory=lambda context: RepositoryRegistry(),
)


def get_registry(context: ServletContext) -> RepositoryRegistry:
    """Return the repository registry for *context*, creating it if needed."""
    return _REGISTRY.get_or_create(context)


def _strip_trailing_slash(path: PagePath) -> PagePath:
    value = str(path)
    if value == "/" or not value.endswith("/"):
        return path
    try:
        return PagePath(value[:-1])
    except ValidationError as exc:
        msg = "Stripping trailing slash from path should not render it invalid"
        raise AssertionError(msg) from exc


class JspPageRepository:
    """Accesses JSP pages of a hosting context under one base path.

    Use ``get_instance()``; the constructor does not register the
    repository and is not part of the public API.

    Usage::

        repo = JspPageRepository.get_instance(context, "/blog")
        target = repo.get_dispatch_target("/post1")
        if target is not None:
            output = target.forward(request)
    """

    __slots__ = ("_cache", "_context", "_path", "_prefix")

    @classmethod
    def get_instance(
        cls,
        context: ServletContext,
        path: PagePath | str,
    ) -> "JspPageRepository":
        """Return the repository for *context* and *path*.

        Only one repository is created per unique context and path.
        Any single trailing slash on *path* is stripped first, so
        ``/blog/`` and ``/blog`` share an instance.
        """
        normalized = _strip_trailing_slash(PagePath.value_of(path))
        return get_registry(context).get_or_create(
            normalized,
            lambda: cls(context, normalized),
        )

    @classmethod
    def registered(cls, context: ServletContext) -> list["JspPageRepository"]:
        """Return the repositories already registered on *context*."""
        registry = _REGISTRY.get(context)
        if registry is None:
            return []
        return registry.repositories()

    def __init__(self, context: ServletContext, path: PagePath) -> None:
        self._context = context
        self._cache = ResourceCache.get_cache(context)
        self._path = path
        value = str(path)
        self._prefix = "" if value == "/" else value

    @property
    def context(self) -> ServletContext:
        return self._context

    @property
    def path(self) -> PagePath:
        """The base path, without any trailing slash except for ``/``."""
        return self._path

    @property
    def prefix(self) -> str:
        """The base path for direct concatenation: ``""`` for ``/``."""
        return self._prefix

    def is_available(self) -> bool:
        """Local repositories are always available."""
        return True

    def get_dispatch_target(self, path: PagePath | str) -> DispatchTarget | None:
        """Resolve *path* to its resource and a dispatcher for it.

        Returns ``None`` when the page does not exist, is an include
        fragment, or the context will not dispatch to it.
        """
        value = str(PagePath.value_of(path))
        if value.endswith(INCLUDE_SUFFIX):
            logger.debug("%s: %s is an include fragment", self, value)
            return None

        suffix = DIRECTORY_INDEX if value.endswith("/") else JSP_EXTENSION
        resource_path = self._prefix + value + suffix
        if self._cache.get_resource(resource_path) is None:
            logger.debug("%s: no resource at %s", self, resource_path)
            return None

        dispatcher = self._context.get_request_dispatcher(resource_path)
        if dispatcher is None:
            logger.warning("%s: resource %s exists but has no dispatcher", self, resource_path)
            return None
        return DispatchTarget(resource_path, dispatcher)

    def exists(self, path: PagePath | str) -> bool:
        """Whether *path* resolves to a dispatchable page."""
        return self.get_dispatch_target(path) is not None

    def __str__(self) -> str:
        return f"{SCHEME}:{self._prefix}"

    def __repr__(self) -> str:
        return f"<JspPageRepository {self}>"
