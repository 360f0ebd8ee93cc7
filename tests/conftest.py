"""Test fixtures for fbgraph tests.

Requests never leave the process: every client is wired to an
httpx.MockTransport through request_options["transport"].
"""

from collections.abc import Callable

import httpx
import pytest

from fbgraph import GraphAPI


class GraphServer:
    """Records outgoing requests and replies with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.response_kwargs: dict = {"status_code": 200, "text": "{}"}
        self.error: Exception | None = None

    def reply(self, status_code: int = 200, text: str = "", headers: dict | None = None, content: bytes | None = None) -> None:
        self.response_kwargs = {"status_code": status_code, "headers": headers}
        if content is not None:
            self.response_kwargs["content"] = content
        else:
            self.response_kwargs["text"] = text

    def fail(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(**self.response_kwargs)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class CallbackRecorder:
    """Callable standing in for a user callback; remembers each invocation."""

    def __init__(self):
        self.calls: list[tuple] = []

    def __call__(self, error, result):
        self.calls.append((error, result))

    @property
    def error(self):
        return self.calls[-1][0]

    @property
    def result(self):
        return self.calls[-1][1]


@pytest.fixture
def server() -> GraphServer:
    return GraphServer()


@pytest.fixture
def callback() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def make_graph(server: GraphServer) -> Callable[..., GraphAPI]:
    """Build a GraphAPI whose transport is the fake server."""

    def _make(**kwargs) -> GraphAPI:
        options = dict(kwargs.pop("request_options", {}))
        options.setdefault("transport", server.transport)
        kwargs.setdefault("graph_url", "https://graph.facebook.com")
        return GraphAPI(request_options=options, **kwargs)

    return _make


@pytest.fixture
def graph(make_graph) -> GraphAPI:
    return make_graph(access_token="TOKEN")
