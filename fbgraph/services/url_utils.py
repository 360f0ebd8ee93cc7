"""URL helpers for building Graph API request URLs."""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

from fbgraph.config import ClientConfig
from fbgraph.core.security import appsecret_proof

SCHEME_PREFIX = "http"

_DELETE_METHOD_RE = re.compile(r"[?&]method=delete", re.IGNORECASE)


def is_absolute_url(url: str) -> bool:
    """Check if a URL already carries a scheme (``http``/``https``)."""
    return url[:4] == SCHEME_PREFIX


def encode_params(params: Mapping[str, Any]) -> str:
    """URL-encode a mapping; sequence values become repeated keys."""
    return urlencode(params, doseq=True)


def encode_component(value: str) -> str:
    """Percent-encode a single query value the way encodeURIComponent does."""
    return quote(value, safe="!~*'()")


def append_query(url: str, query: str) -> str:
    """Append an already-encoded query fragment with ``&`` or ``?``."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def add_delete_method(url: str) -> str:
    """Ensure the URL carries ``method=delete``, without duplicating it."""
    if _DELETE_METHOD_RE.search(url):
        return url
    return append_query(url, "method=delete")


# ---------------------------------------------------------------------------
# Request URL preparation
# ---------------------------------------------------------------------------


def clean_url(url: str, config: ClientConfig) -> str:
    """Add the leading slash, access token and appsecret_proof to a path.

    Steps run in a fixed order; a token or proof already present in the URL
    is never added twice.
    """
    url = url.strip()

    if not url.startswith("/") and not is_absolute_url(url):
        url = "/" + url

    if config.access_token and "access_token=" not in url:
        url = append_query(url, f"access_token={config.access_token}")

    if config.access_token and config.app_secret and "appsecret_proof" not in url:
        proof = appsecret_proof(config.app_secret, config.access_token)
        url = append_query(url, f"appsecret_proof={proof}")

    return url


def prepare_url(url: str, config: ClientConfig) -> str:
    """Clean the URL and prefix the graph base URL for relative paths."""
    url = clean_url(url, config)

    if not is_absolute_url(url):
        url = config.graph_url + url

    return url
