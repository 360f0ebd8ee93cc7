"""One-shot Graph API request: URL preparation, dispatch and normalization."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from urllib.parse import urlsplit

import httpx

from fbgraph.config import ClientConfig
from fbgraph.core.errors import GraphAPIError, GraphError, TransportError
from fbgraph.services.meta_client import get_graph_client, split_options
from fbgraph.services.response_parser import normalize_response
from fbgraph.services.url_utils import encode_params, prepare_url

logger = logging.getLogger(__name__)

Callback = Callable[[Any, Any], Any]


async def deliver(awaitable: Awaitable[Any], callback: Callback | None = None) -> Any:
    """Await a single result and hand it to ``callback`` exactly once.

    Without a callback the result is returned and errors are raised. With a
    callback it receives ``(None, result)`` on success, ``(error, None)`` for
    library errors and ``(payload, None)`` with the API's own error payload.
    """
    try:
        result = await awaitable
    except GraphAPIError as e:
        if callback is None:
            raise
        callback(e.error, None)
        return None
    except GraphError as e:
        if callback is None:
            raise
        callback(e, None)
        return None

    if callback is not None:
        callback(None, result)
    return result


class GraphRequest:
    """A single GET or POST against the Graph API.

    The request works from the ClientConfig snapshot it was built with, so
    changes to the owning client after construction do not affect it.
    """

    def __init__(
        self,
        config: ClientConfig,
        method: str,
        path: str,
        payload: Mapping[str, Any] | Callback | None = None,
        callback: Callback | None = None,
    ):
        if callback is None and callable(payload):
            callback, payload = payload, None

        self.method = method.upper()
        if self.method not in ("GET", "POST"):
            raise ValueError(f"Unsupported Graph API method: {method}")

        self.config = config
        self.url = prepare_url(path, config)
        self.payload = dict(payload or {})
        self.callback = callback
        self.options = dict(config.request_options)

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    async def send(self) -> Any:
        """Execute the request and complete it exactly once."""
        return await deliver(self.execute(), self.callback)

    async def execute(self) -> Any:
        """Execute the request; return the normalized result or raise GraphError."""
        if self.method == "GET":
            body = await self._get()
        else:
            body = await self._post()
        return normalize_response(body)

    async def _get(self) -> Any:
        response = await self._request()
        content_type = response.headers.get("content-type", "")
        if "image" in content_type:
            return {"image": True, "location": response.headers.get("location")}
        return response.text

    async def _post(self) -> Any:
        response = await self._request(
            content=encode_params(self.payload),
            content_type="application/x-www-form-urlencoded",
        )
        return response.text

    async def _request(self, content: str | None = None, content_type: str | None = None) -> httpx.Response:
        client_kwargs, request_kwargs, encoding = split_options(self.options)
        if content_type:
            request_kwargs["headers"]["Content-Type"] = content_type

        logger.debug(f"{self.method} {self.path}", extra={"method": self.method, "path": self.path})

        try:
            async with get_graph_client(**client_kwargs) as client:
                response = await client.request(
                    self.method,
                    self.url,
                    content=content,
                    follow_redirects=False,
                    **request_kwargs,
                )
        except httpx.RequestError as e:
            logger.error(f"Graph API {self.method} {self.path} failed: {e!r}")
            raise TransportError("transport error", cause=e) from e

        logger.debug(
            f"Response: {response.status_code} for {self.method} {self.path}",
            extra={"method": self.method, "path": self.path, "status_code": response.status_code},
        )
        response.encoding = encoding
        return response
