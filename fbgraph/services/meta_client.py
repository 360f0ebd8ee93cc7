"""Transport option handling and httpx client factory for Graph API requests."""

import codecs
from collections.abc import Mapping
from typing import Any

import httpx

from fbgraph.config import DEFAULT_ENCODING, USER_AGENT, settings
from fbgraph.core.errors import ValidationError

# Options forwarded to AsyncClient.request(); everything else configures the client
REQUEST_OPTION_KEYS = frozenset({"headers", "cookies", "auth", "timeout", "extensions"})

# Fixed per request, never taken from options
RESERVED_OPTION_KEYS = frozenset({"method", "url", "follow_redirects", "base_url"})


def _check_encoding(encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except (LookupError, TypeError) as e:
        raise ValidationError(f"Unknown response encoding: {encoding!r}", cause=e) from e
    return encoding


def split_options(options: Mapping[str, Any]) -> tuple[dict, dict, str]:
    """Split transport options into (client kwargs, request kwargs, encoding).

    Raises ValidationError for an encoding Python has no codec for.
    """
    client_kwargs: dict[str, Any] = {}
    request_kwargs: dict[str, Any] = {}
    encoding = DEFAULT_ENCODING

    for key, value in options.items():
        if key in RESERVED_OPTION_KEYS:
            continue
        if key == "encoding":
            encoding = _check_encoding(value or DEFAULT_ENCODING)
        elif key in REQUEST_OPTION_KEYS:
            request_kwargs[key] = value
        else:
            client_kwargs[key] = value

    # Case-insensitive merge: a user "user-agent" replaces the default
    headers = httpx.Headers({"User-Agent": USER_AGENT})
    headers.update(request_kwargs.get("headers") or {})
    request_kwargs["headers"] = headers

    return client_kwargs, request_kwargs, encoding


def get_graph_client(**client_kwargs: Any) -> httpx.AsyncClient:
    """Create an httpx client configured for Graph API requests.

    Redirects are never followed so image redirects stay observable.
    """
    client_kwargs.setdefault("timeout", settings.http_timeout)
    client_kwargs["follow_redirects"] = False
    return httpx.AsyncClient(**client_kwargs)
