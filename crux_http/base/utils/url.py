"""URL assembly helpers shared by both adapters."""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote

from ..models import RequestConfig

_ABSOLUTE_URL = re.compile(r"^([a-z][a-z\d+\-.]*:)?//", re.IGNORECASE)
# Characters ``encodeURIComponent`` leaves untouched besides the unreserved set.
_COMPONENT_SAFE = "!~*'()"


def is_absolute_url(url: str) -> bool:
    """Return ``True`` for ``scheme://`` and protocol-relative ``//`` URLs."""
    return bool(_ABSOLUTE_URL.match(url))


def combine_urls(base_url: str, relative_url: str) -> str:
    """Join ``base_url`` and ``relative_url`` with exactly one slash."""
    if not relative_url:
        return base_url
    return f"{base_url.rstrip('/')}/{relative_url.lstrip('/')}"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _pairs(params: Mapping[str, Any]) -> Iterable[Tuple[str, str]]:
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if item is not None:
                    yield key, _stringify(item)
        else:
            yield key, _stringify(value)


def build_url(url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append ``params`` to ``url`` as a percent-encoded query string.

    ``None`` values are dropped, sequences become repeated keys and booleans
    serialize as ``true``/``false``. The separator is ``&`` when ``url``
    already carries a query.
    """
    if not params:
        return url
    encoded: List[str] = [
        f"{quote(key, safe=_COMPONENT_SAFE)}={quote(value, safe=_COMPONENT_SAFE)}"
        for key, value in _pairs(params)
    ]
    if not encoded:
        return url
    separator = "&" if "?" in url else "?"
    return url + separator + "&".join(encoded)


def build_full_url(config: RequestConfig) -> str:
    """Resolve ``base_url`` + ``url`` + ``params`` for ``config``."""
    url = config.url or ""
    if config.base_url and not is_absolute_url(url):
        url = combine_urls(config.base_url, url)
    return build_url(url, config.params)


__all__ = ["is_absolute_url", "combine_urls", "build_url", "build_full_url"]
