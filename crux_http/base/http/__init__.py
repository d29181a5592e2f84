"""HTTP utilities package for adapters.

Exposes per-exchange httpx client construction.
"""

from .client import build_httpx_client, build_timeout

__all__ = ["build_httpx_client", "build_timeout"]
