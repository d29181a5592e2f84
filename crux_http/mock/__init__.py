"""Mock adapter package for offline use and tests."""

from .adapter import MockAdapter, MockRoute

__all__ = ["MockAdapter", "MockRoute"]
