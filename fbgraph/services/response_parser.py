"""Tolerant response body normalization.

The Graph API answers in several shapes: JSON documents, bare scalars such as
``true``, URL-encoded strings (``access_token=...&expires=...``) and, for
profile pictures, redirects to an image. ``classify_body`` sorts a body into
one of three variants and ``decode_body`` turns each variant into a result.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit

from fbgraph.core.errors import GraphAPIError, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Structured:
    """A body that is already a decoded value."""

    value: Any


@dataclass(frozen=True)
class JsonLike:
    """A string body containing both ``{`` and ``}``."""

    text: str


@dataclass(frozen=True)
class QueryLike:
    """Any other string body: a bare value or a URL-encoded query."""

    text: str


ResponseBody = Structured | JsonLike | QueryLike


def classify_body(body: Any) -> ResponseBody:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not isinstance(body, str):
        return Structured(body)
    if "{" in body and "}" in body:
        return JsonLike(body)
    return QueryLike(body)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_json(text: str) -> Any:
    """Strict JSON decoding; NaN and Infinity are rejected."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # RecursionError: pathologically nested arrays or objects
        logger.error(f"Failed to parse Graph API response as JSON: {e}")
        raise ParseError("Error parsing json", cause=e) from e


def decode_query(text: str) -> dict[str, str | list[str]]:
    """Decode a bare value or URL-encoded string into a flat dict.

    A value without ``=`` is wrapped as ``data=<value>``. No type coercion
    happens: ``true`` decodes to ``{"data": "true"}``.
    """
    if "=" not in text:
        text = "data=" + text
    if not text.startswith("?"):
        text = "?" + text

    parsed = parse_qs(urlsplit(text).query, keep_blank_values=True)
    return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}


def decode_body(body: ResponseBody) -> Any:
    match body:
        case Structured(value=value):
            return value
        case JsonLike(text=text):
            return decode_json(text)
        case QueryLike(text=text):
            return decode_query(text)
    raise TypeError(f"Unknown response body variant: {body!r}")


def normalize_response(body: Any) -> Any:
    """Decode a response body and surface an embedded API ``error``.

    Returns the normalized result. Raises ParseError for an undecodable JSON
    body and GraphAPIError when the decoded object carries an ``error`` field.
    """
    result = decode_body(classify_body(body))

    if isinstance(result, dict) and result.get("error"):
        logger.warning(f"Graph API returned an error: {result['error']}")
        raise GraphAPIError(result["error"])

    return result
