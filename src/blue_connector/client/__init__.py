"""HTTP/GraphQL client layer for the Blue connector."""

from .exceptions import (
    BlueConnectorError,
    DispatchError,
    GraphQLError,
    NodeExecutionError,
    ParameterError,
    TransportAuthError,
    TransportError,
    TransportTimeoutError,
)
from .http_client import close_http_client, get_http_client

__all__ = [
    "BlueConnectorError",
    "DispatchError",
    "GraphQLError",
    "NodeExecutionError",
    "ParameterError",
    "TransportAuthError",
    "TransportError",
    "TransportTimeoutError",
    "close_http_client",
    "get_http_client",
]
