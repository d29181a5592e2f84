"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``crux_http.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts`` for organization.

Notes
-----
- ``CancelToken`` is a one-shot signal observable synchronously
	(``throw_if_requested``) and asynchronously (``subscribe`` / ``wait``).
- ``Cancel`` is the reason raised by requests that observe a fired token.
- ``is_cancel`` tests for genuine ``Cancel`` instances only.
"""

from .cancellation_parts.cancel import Cancel, is_cancel
from .cancellation_parts.cancel_token import CancelToken
from .cancellation_parts.token_source import CancelTokenSource

__all__ = ["Cancel", "CancelToken", "CancelTokenSource", "is_cancel"]
