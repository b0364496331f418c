"""Start-up wiring for page repositories.

Materializes a context's repository registry and resource cache before
the first request arrives.  Lazy creation on first ``get_instance()``
behaves the same; this only moves the work to start-up.

Usage::

    context = LocalContext("./site")
    install(context)
    context.start()
"""

from jsppages.cache import ResourceCache
from jsppages.container import LocalContext, ServletContext
from jsppages.repository import get_registry


def initialize(context: ServletContext) -> None:
    """Create the registry and resource cache for *context* now."""
    get_registry(context)
    ResourceCache.get_cache(context)


def install(context: LocalContext) -> None:
    """Run ``initialize`` as one of *context*'s startup hooks."""
    context.on_startup(lambda: initialize(context))
