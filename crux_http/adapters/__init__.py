"""Transport adapters.

Concrete adapters (``fetch_adapter.FetchAdapter`` and
``socket_adapter.SocketAdapter``) are imported lazily through
:class:`AdapterFactory`; import them from their modules when needed directly.
"""

from .adapter import Adapter
from .environment import RuntimeEnvironment, current_environment, detect_environment
from .exchange import ProgressTracker, collect_body, settle
from .factory import AdapterFactory, AdapterUnavailableError, resolve_adapter

__all__ = [
    "Adapter",
    "RuntimeEnvironment",
    "current_environment",
    "detect_environment",
    "ProgressTracker",
    "collect_body",
    "settle",
    "AdapterFactory",
    "AdapterUnavailableError",
    "resolve_adapter",
]
