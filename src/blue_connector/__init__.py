"""Blue project-management connector for workflow-automation hosts."""

from .client.exceptions import (
    BlueConnectorError,
    DispatchError,
    GraphQLError,
    NodeExecutionError,
    ParameterError,
    TransportAuthError,
    TransportError,
    TransportTimeoutError,
)
from .client.graphql import GraphQLTransport, normalize_response
from .node import BlueNode
from .observability import configure_logging
from .operations import operation_registry
from .params import ResourceLocator, normalize_locator
from .resolver import ResourceResolver
from .types import (
    AdditionalOptions,
    BlueCredentials,
    ListSearchItem,
    ListSearchResult,
    NodeItemResult,
    OperationContext,
    OperationResult,
)

__version__ = "0.1.0"

__all__ = [
    "AdditionalOptions",
    "BlueConnectorError",
    "BlueCredentials",
    "BlueNode",
    "DispatchError",
    "GraphQLError",
    "GraphQLTransport",
    "ListSearchItem",
    "ListSearchResult",
    "NodeExecutionError",
    "NodeItemResult",
    "OperationContext",
    "OperationResult",
    "ParameterError",
    "ResourceLocator",
    "ResourceResolver",
    "TransportAuthError",
    "TransportError",
    "TransportTimeoutError",
    "configure_logging",
    "normalize_locator",
    "normalize_response",
    "operation_registry",
]
