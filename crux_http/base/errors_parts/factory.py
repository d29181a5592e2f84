"""
Error construction helpers used by adapters.

``create_error`` selects the tagged subclass from the code so that adapters
never need to pick exception classes themselves; ``wrap_transport_exception``
turns a low-level exception into a classified :class:`TransportError`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Union

from .classification import classify_exception
from .error_code import HTTP_CODE_PREFIX, ErrorCode
from .request_error import RequestError, StatusError, TransportError

if TYPE_CHECKING:
    from ..models import RequestConfig, Response

_TRANSPORT_CODES = frozenset(code.value for code in ErrorCode)

def create_error(
    message: str,
    config: Optional["RequestConfig"] = None,
    code: Union[ErrorCode, str, None] = None,
    request: Any = None,
    response: Optional["Response"] = None,
) -> RequestError:
    """Build a tagged :class:`RequestError` for ``code``.

    ``HTTP_<status>`` codes yield :class:`StatusError`, known
    :class:`ErrorCode` values yield :class:`TransportError`, anything else the
    plain base class.
    """
    raw = code.value if isinstance(code, ErrorCode) else code
    if raw and raw.startswith(HTTP_CODE_PREFIX):
        cls = StatusError
    elif raw in _TRANSPORT_CODES:
        cls = TransportError
    else:
        cls = RequestError
    return cls(message, config, raw, request, response)


def wrap_transport_exception(
    exc: BaseException,
    config: Optional["RequestConfig"] = None,
    request: Any = None,
) -> RequestError:
    """Return a classified error for a low-level transport exception."""
    code = classify_exception(exc)
    if code is ErrorCode.TIMEOUT and config is not None and config.timeout:
        message = f"timeout of {config.timeout}s exceeded"
    else:
        message = str(exc) or type(exc).__name__
    return create_error(message, config, code, request if request is not None else exc)


__all__ = ["create_error", "wrap_transport_exception"]
