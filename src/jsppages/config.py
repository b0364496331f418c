"""Context configuration.

ContextConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ContextConfig:
    """Hosting context configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ContextConfig(cache_refresh_interval=0.0, display_name="docs")
    """

    # Resource cache: seconds a lookup result is trusted (0 disables caching)
    cache_refresh_interval: float = 5.0

    # Diagnostics
    display_name: str = "jsppages"
