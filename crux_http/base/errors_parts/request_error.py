"""
Structured request error exception types.

Wraps transport and status failures with a machine-readable ``code`` plus the
configuration, raw request handle and (for status failures) the response, so
callers can branch programmatically without parsing messages.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from .error_code import ErrorCode

if TYPE_CHECKING:
    from ..models import RequestConfig, Response


class RequestError(Exception):
    """Base class for failures raised by adapters.

    Attributes:
        message: Human-readable error message suitable for logging.
        config: Effective configuration of the failed exchange.
        code: ``ErrorCode`` value or ``HTTP_<status>`` string.
        request: Transport-level request/error object, when available.
        response: Fully formed response for status failures, else ``None``.
    """

    is_request_error = True

    def __init__(
        self,
        message: str,
        config: Optional["RequestConfig"] = None,
        code: Union[ErrorCode, str, None] = None,
        request: Any = None,
        response: Optional["Response"] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.config = config
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.request = request
        self.response = response

    @property
    def status(self) -> Optional[int]:
        return self.response.status if self.response is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable summary of the failure."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "method": self.config.method.value if self.config else None,
            "url": self.config.url if self.config else None,
        }

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code or '-'}: {self.message}"


class TransportError(RequestError):
    """Connection-level failure (refused, reset, DNS, timeout, size caps)."""


class StatusError(RequestError):
    """Adapter-classified non-success HTTP status; ``response`` is always set."""


class InterceptorRejection(Exception):
    """Raised when a response failure handler returns a non-exception value.

    Attributes:
        value: The value returned by the handler.
        error: The failure that was handed to the handler.
    """

    def __init__(self, value: Any, error: BaseException) -> None:
        super().__init__(f"response interceptor rejected with {value!r}")
        self.value = value
        self.error = error


__all__ = ["RequestError", "TransportError", "StatusError", "InterceptorRejection"]
