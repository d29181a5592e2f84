"""Adapter factory.

Purpose
-------
Map an :class:`AdapterKind` selection to a concrete adapter instance. Adapter
modules are imported lazily with ``importlib`` so that selecting the socket
adapter never imports ``httpx`` and vice versa.

Selection rules
---------------
- An object exposing ``request`` is returned unchanged.
- ``fetch`` / ``socket`` require the matching capability of the
  :class:`RuntimeEnvironment`; otherwise :class:`AdapterUnavailableError`.
- ``auto`` prefers ``fetch``, then ``socket``. When neither capability is
  reported it falls back to ``fetch`` and logs ``adapter.fallback``.
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any, Dict, Optional, Tuple, Type, Union

from ..base.logging import get_logger, log_event
from ..base.models import AdapterKind
from .environment import RuntimeEnvironment, current_environment

_logger = get_logger(__name__)


class AdapterUnavailableError(Exception):
    """Raised when a requested adapter cannot run in the current environment.

    Failure modes include:
    - The selection is not a known :class:`AdapterKind`.
    - The environment lacks the capability the adapter needs.
    - The adapter module cannot be imported or its class is missing.
    """


class AdapterFactory:
    """Create transport adapters from an :class:`AdapterKind`."""

    _ADAPTERS: Dict[AdapterKind, Dict[str, str]] = {
        AdapterKind.FETCH: {
            "module": "crux_http.adapters.fetch_adapter",
            "class": "FetchAdapter",
            "capability": "has_fetch",
        },
        AdapterKind.SOCKET: {
            "module": "crux_http.adapters.socket_adapter",
            "class": "SocketAdapter",
            "capability": "has_sockets",
        },
    }

    @classmethod
    def create(cls, kind: Union[AdapterKind, str], **kwargs: Any) -> Any:
        """Import and construct the adapter registered for ``kind``."""
        try:
            key = AdapterKind(kind)
        except ValueError as exc:
            raise AdapterUnavailableError(f"Unknown adapter '{kind}'") from exc
        spec = cls._ADAPTERS.get(key)
        if not spec:
            raise AdapterUnavailableError(f"Adapter '{key.value}' is a selection mode, not an adapter")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise AdapterUnavailableError(
                f"Failed to import module '{module_path}' for adapter '{key.value}': {exc}"
            ) from exc
        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise AdapterUnavailableError(
                f"Adapter class '{class_name}' not found in '{module_path}'"
            ) from exc
        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise AdapterUnavailableError(
                f"Invalid arguments for '{key.value}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def resolve(
        cls,
        selection: Any = AdapterKind.AUTO,
        environment: Optional[RuntimeEnvironment] = None,
        **kwargs: Any,
    ) -> Any:
        """Return an adapter instance for ``selection`` in ``environment``."""
        if selection is not None and not isinstance(selection, (AdapterKind, str)):
            if callable(getattr(selection, "request", None)):
                return selection
            raise AdapterUnavailableError(f"Object {selection!r} is not an adapter")

        env = environment or current_environment()
        try:
            kind = AdapterKind(selection) if selection is not None else AdapterKind.AUTO
        except ValueError as exc:
            raise AdapterUnavailableError(f"Unknown adapter '{selection}'") from exc
        if kind is AdapterKind.AUTO:
            for candidate in (AdapterKind.FETCH, AdapterKind.SOCKET):
                if cls._available(candidate, env):
                    return cls.create(candidate, **kwargs)
            log_event(
                _logger,
                "adapter.fallback",
                level=logging.WARNING,
                requested=kind.value,
                adapter=AdapterKind.FETCH.value,
                platform=env.platform,
            )
            return cls.create(AdapterKind.FETCH, **kwargs)

        if not cls._available(kind, env):
            raise AdapterUnavailableError(
                f"Adapter '{kind.value}' is not available on platform '{env.platform}'"
            )
        return cls.create(kind, **kwargs)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the concrete adapter names in deterministic order."""
        return tuple(kind.value for kind in cls._ADAPTERS)

    @classmethod
    def _available(cls, kind: AdapterKind, env: RuntimeEnvironment) -> bool:
        return bool(getattr(env, cls._ADAPTERS[kind]["capability"]))


def resolve_adapter(
    selection: Any = AdapterKind.AUTO,
    environment: Optional[RuntimeEnvironment] = None,
    **kwargs: Any,
) -> Any:
    """Compatibility helper that delegates to :meth:`AdapterFactory.resolve`."""
    return AdapterFactory.resolve(selection, environment, **kwargs)


__all__ = ["AdapterFactory", "AdapterUnavailableError", "resolve_adapter"]
