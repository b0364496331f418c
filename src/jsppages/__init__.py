"""jsppages — JSP page repositories for an in-process application context.

Maps logical page paths onto ``*.jsp`` resources and hands back a
dispatch target that forwards or includes a request to them.

Basic usage::

    from jsppages import JspPageRepository, LocalContext

    context = LocalContext("./site", renderer=render_page)
    repo = JspPageRepository.get_instance(context, "/blog")

    target = repo.get_dispatch_target("/post1")   # probes /blog/post1.jsp
    if target is not None:
        output = target.forward(request)
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "AttributeTypeError",
    "ConfigurationError",
    "ContextAttribute",
    "ContextConfig",
    "ContextDestroyedError",
    "DispatchMode",
    "DispatchTarget",
    "Invocation",
    "JspPageRepository",
    "JspPagesError",
    "LocalContext",
    "PagePath",
    "RequestDispatcher",
    "ResourceCache",
    "ServletContext",
    "ValidationError",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AttributeTypeError": "jsppages.errors",
    "ConfigurationError": "jsppages.errors",
    "ContextAttribute": "jsppages.attributes",
    "ContextConfig": "jsppages.config",
    "ContextDestroyedError": "jsppages.errors",
    "DispatchMode": "jsppages.dispatch",
    "DispatchTarget": "jsppages.dispatch",
    "Invocation": "jsppages.dispatch",
    "JspPageRepository": "jsppages.repository",
    "JspPagesError": "jsppages.errors",
    "LocalContext": "jsppages.container",
    "PagePath": "jsppages.path",
    "RequestDispatcher": "jsppages.dispatch",
    "ResourceCache": "jsppages.cache",
    "ServletContext": "jsppages.container",
    "ValidationError": "jsppages.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import jsppages`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
