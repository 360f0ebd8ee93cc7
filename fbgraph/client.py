"""Graph API client.

Instances of GraphAPI hold the access token, app secret and transport options
and turn method calls into Graph API requests.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from fbgraph.config import TOKEN_PATH, ClientConfig, settings
from fbgraph.core.errors import ValidationError
from fbgraph.services.graph_request import Callback, GraphRequest, deliver
from fbgraph.services.url_utils import (
    add_delete_method,
    append_query,
    encode_component,
    encode_params,
)

logger = logging.getLogger(__name__)


def _reject(message: str, callback: Callback | None) -> None:
    error = ValidationError(message)
    if callback is None:
        raise error
    logger.warning(message)
    callback(error, None)


class GraphAPI:
    """A client for the Facebook Graph API.

    Every call is a coroutine. Pass ``callback(error, result)`` to receive the
    outcome through a callback instead of a return value or exception:

        graph = GraphAPI(access_token=token)
        user = await graph.get("zuck", {"fields": "name,picture"})
        await graph.post("me/feed", {"message": "Hello, world"}, callback=on_posted)

    Profile-picture requests, which the API answers with a redirect, resolve
    to ``{"image": True, "location": <image url>}``.
    """

    def __init__(
        self,
        access_token: str | None = None,
        app_secret: str | None = None,
        graph_url: str | None = None,
        oauth_dialog_url: str | None = None,
        oauth_dialog_url_mobile: str | None = None,
        request_options: Mapping[str, Any] | None = None,
    ):
        self._access_token = access_token or settings.access_token
        self._app_secret = app_secret or settings.app_secret
        self._graph_url = graph_url or settings.graph_url
        self.oauth_dialog_url = oauth_dialog_url or settings.oauth_dialog_url
        self.oauth_dialog_url_mobile = oauth_dialog_url_mobile or settings.oauth_dialog_url_mobile
        self._request_options: dict[str, Any] = dict(request_options or {})

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @access_token.setter
    def access_token(self, token: str | None) -> None:
        self._access_token = token

    @property
    def app_secret(self) -> str | None:
        return self._app_secret

    @app_secret.setter
    def app_secret(self, secret: str | None) -> None:
        self._app_secret = secret

    @property
    def graph_url(self) -> str:
        return self._graph_url

    @graph_url.setter
    def graph_url(self, url: str) -> None:
        self._graph_url = url

    @property
    def request_options(self) -> dict[str, Any]:
        """Transport options applied to every request (see meta_client)."""
        return self._request_options

    @request_options.setter
    def request_options(self, options: Mapping[str, Any]) -> None:
        if not isinstance(options, Mapping):
            raise TypeError(f"request_options must be a mapping, not {type(options).__name__}")
        self._request_options = dict(options)

    def snapshot(self) -> ClientConfig:
        """Return an immutable copy of the current configuration."""
        return ClientConfig(
            access_token=self._access_token,
            app_secret=self._app_secret,
            graph_url=self._graph_url,
            oauth_dialog_url=self.oauth_dialog_url,
            oauth_dialog_url_mobile=self.oauth_dialog_url_mobile,
            request_options=self._request_options,
        )

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | Callback | None = None,
        callback: Callback | None = None,
    ) -> Any:
        """Fetch ``path`` from the graph, with ``params`` as its query string."""
        if callback is None and callable(params):
            callback, params = params, None

        if not isinstance(path, str):
            return _reject("GraphRequest api url must be a string", callback)

        if params:
            path = append_query(path, encode_params(params))

        return await GraphRequest(self.snapshot(), "GET", path, callback=callback).send()

    async def post(
        self,
        path: str,
        payload: Mapping[str, Any] | Callback | None = None,
        callback: Callback | None = None,
    ) -> Any:
        """Publish ``payload`` to ``path``. Most writes need an access token."""
        if callback is None and callable(payload):
            callback, payload = payload, None

        if not isinstance(path, str):
            return _reject("GraphRequest api url must be a string", callback)

        if payload is None:
            payload = {}
            if "access_token" in path and self._access_token:
                payload["access_token"] = self._access_token

        return await GraphRequest(self.snapshot(), "POST", path, payload, callback).send()

    async def delete(self, path: str, callback: Callback | None = None) -> Any:
        """Delete an object: a POST carrying ``method=delete``."""
        if not isinstance(path, str):
            return _reject("GraphRequest api url must be a string", callback)

        return await self.post(add_delete_method(path), callback=callback)

    async def search(self, options: Mapping[str, Any] | None = None, callback: Callback | None = None) -> Any:
        """Search public objects, e.g. ``{"q": "coffee", "type": "place"}``."""
        path = "/search?" + encode_params(options or {})
        return await self.get(path, callback=callback)

    async def query(self, query: str | Mapping[str, str], callback: Callback | None = None) -> Any:
        """Run an FQL query, or a multiquery given as a mapping of named queries."""
        if not isinstance(query, str):
            query = json.dumps(query)

        return await self.get("/fql?q=" + encode_component(query), callback=callback)

    # ------------------------------------------------------------------
    # OAuth
    # ------------------------------------------------------------------

    def get_oauth_url(self, params: Mapping[str, Any], mobile: bool = False) -> str:
        """Build the OAuth dialog URL for ``client_id``, ``redirect_uri``, etc."""
        url = self.oauth_dialog_url_mobile if mobile else self.oauth_dialog_url
        return url + encode_params(params)

    async def authorize(self, params: Mapping[str, Any], callback: Callback | None = None) -> Any:
        """Exchange an OAuth ``code`` for an access token and keep it.

        ``params`` holds ``client_id``, ``redirect_uri``, ``client_secret``
        and ``code``.
        """
        request = GraphRequest(self.snapshot(), "GET", append_query(TOKEN_PATH, encode_params(params)))

        async def exchange() -> Any:
            result = await request.execute()
            if isinstance(result, dict):
                self.access_token = result.get("access_token")
            logger.info("Access token obtained from OAuth code exchange")
            return result

        return await deliver(exchange(), callback)

    async def extend_access_token(self, params: Mapping[str, Any], callback: Callback | None = None) -> Any:
        """Exchange a short-lived token for a long-lived one.

        Uses ``params["access_token"]`` when given, otherwise the client's
        own token, which is then replaced by the extended one.
        """
        params = dict(params)
        explicit_token = params.get("access_token")
        params["grant_type"] = "fb_exchange_token"
        params["fb_exchange_token"] = explicit_token or self._access_token

        request = GraphRequest(self.snapshot(), "GET", append_query(TOKEN_PATH, encode_params(params)))

        async def exchange() -> Any:
            result = await request.execute()
            if not explicit_token and isinstance(result, dict):
                self.access_token = result.get("access_token")
                logger.info("Access token extended")
            return result

        return await deliver(exchange(), callback)
