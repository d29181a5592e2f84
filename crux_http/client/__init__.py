"""Request orchestration: client instances, interceptor chain and dispatch."""

from .chain import InterceptorChain
from .dispatch import dispatch
from .http_client import HttpClient

__all__ = ["HttpClient", "InterceptorChain", "dispatch"]
