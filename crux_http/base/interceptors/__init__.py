"""Interceptor registries for request configurations and responses.

Defines the per-client pair of registries (``Interceptors``) plus the
generic :class:`InterceptorManager` and its :class:`Interceptor` entry type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .interceptor import FailureHandler, Interceptor, SuccessHandler
from .manager import InterceptorManager

if TYPE_CHECKING:
    from ..models import RequestConfig, Response


@dataclass
class Interceptors:
    """Request and response registries owned by one client instance.

    Attributes:
        request: Handlers applied to the effective ``RequestConfig``.
        response: Handlers applied to the ``Response`` or to the failure.
    """

    request: "InterceptorManager[RequestConfig]" = field(default_factory=InterceptorManager)
    response: "InterceptorManager[Response]" = field(default_factory=InterceptorManager)


__all__ = [
    "FailureHandler",
    "Interceptor",
    "InterceptorManager",
    "Interceptors",
    "SuccessHandler",
]
