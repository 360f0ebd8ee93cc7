"""Python client library for the Facebook Graph API.

    graph = GraphAPI(access_token=token, app_secret=secret)
    profile = await graph.get("me")
    picture = await graph.get("me/picture")  # {"image": True, "location": ...}
"""

import logging

from fbgraph.client import GraphAPI
from fbgraph.config import ClientConfig
from fbgraph.core.errors import (
    GraphAPIError,
    GraphError,
    ParseError,
    TransportError,
    ValidationError,
)
from fbgraph.core.security import appsecret_proof, parse_signed_request
from fbgraph.logging_config import setup_logging
from fbgraph.services.graph_request import GraphRequest

__all__ = [
    "ClientConfig",
    "GraphAPI",
    "GraphAPIError",
    "GraphError",
    "GraphRequest",
    "ParseError",
    "TransportError",
    "ValidationError",
    "appsecret_proof",
    "parse_signed_request",
    "setup_logging",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
