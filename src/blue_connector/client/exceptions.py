"""Connector-specific exception types.

Operations raise these internally and catch them at their own boundary,
turning them into failed ``OperationResult`` values. Only ``DispatchError``
and ``NodeExecutionError`` are expected to reach the host loop.
"""

from typing import List, Optional


class BlueConnectorError(Exception):
    """Base exception for all connector errors."""

    def __init__(self, message: str, operation: str = ""):
        self.message = message
        self.operation = operation
        super().__init__(message)


class ParameterError(BlueConnectorError):
    """Missing or invalid parameter, detected before any network call."""

    pass


class DispatchError(BlueConnectorError):
    """The requested operation name is not registered."""

    pass


class GraphQLError(BlueConnectorError):
    """The endpoint answered with a non-empty ``errors`` list."""

    def __init__(
        self,
        messages: List[str],
        operation: str = "",
    ):
        self.messages = list(messages)
        super().__init__(", ".join(self.messages), operation)


class TransportError(BlueConnectorError):
    """Network failure, non-2xx status or unreadable response body."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_body: str = "",
        operation: str = "",
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, operation)


class TransportAuthError(TransportError):
    """Authentication or authorization failure (401/403)."""

    pass


class TransportTimeoutError(TransportError):
    """Request exceeded its per-call timeout."""

    pass


class NodeExecutionError(BlueConnectorError):
    """Raised by the node loop when an item fails and the batch must stop."""

    def __init__(
        self,
        message: str,
        description: str = "",
        item_index: Optional[int] = None,
        operation: str = "",
    ):
        self.description = description
        self.item_index = item_index
        super().__init__(message, operation)
