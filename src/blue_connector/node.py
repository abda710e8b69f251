"""Host-facing entry point: runs one operation per input item.

Items are processed strictly in order; each item's request completes before
the next starts. A failed item either stops the batch with
``NodeExecutionError`` or, with ``continue_on_fail``, yields an inline
``{"error": message}`` record.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from .client.exceptions import BlueConnectorError, NodeExecutionError, ParameterError
from .client.graphql import GraphQLTransport
from .client.http_client import close_http_client
from .config import Settings, get_settings
from .observability.logging import clear_log_context, configure_logging, set_log_context
from .operations import OperationRegistry, operation_registry
from .resolver import ResourceResolver
from .types import (
    AdditionalOptions,
    BlueCredentials,
    ListSearchResult,
    NodeItemResult,
    OperationContext,
    Transport,
)

logger = logging.getLogger(__name__)


class BlueNode:
    """Runs Blue operations for a batch of items."""

    def __init__(
        self,
        credentials: BlueCredentials,
        transport: Optional[Transport] = None,
        registry: Optional[OperationRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.credentials = credentials
        self.settings = settings or get_settings()
        self.transport = transport or GraphQLTransport(self.settings.api_url)
        self.registry = registry or operation_registry

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BlueNode":
        """Build a node for a standalone host from ``BLUE_*`` settings.

        Reads the API tokens from settings and configures connector logging
        from ``environment`` and ``log_level``.
        """
        settings = settings or get_settings()
        configure_logging(settings)
        return cls(BlueCredentials.from_settings(settings), settings=settings)

    async def aclose(self) -> None:
        """Release the shared HTTP connections held for the running loop."""
        await close_http_client()

    async def __aenter__(self) -> "BlueNode":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _build_context(self, index: int, parameters: Mapping[str, Any]) -> OperationContext:
        options = AdditionalOptions.from_raw(
            parameters.get("additionalOptions"),
            default_timeout_ms=self.settings.default_timeout_ms,
        )
        return OperationContext(
            item_index=index,
            credentials=self.credentials,
            parameters=parameters,
            transport=self.transport,
            options=options,
        )

    async def execute(
        self,
        items: Sequence[Mapping[str, Any]],
        continue_on_fail: bool = False,
    ) -> List[NodeItemResult]:
        """Process every item and return one output record per item.

        Raises:
            NodeExecutionError: On the first failing item unless
                ``continue_on_fail`` is set.
        """
        results: List[NodeItemResult] = []

        for index, parameters in enumerate(items):
            operation = str(parameters.get("operation") or "")
            set_log_context(operation=operation or None, item_index=index)
            try:
                if not operation:
                    raise ParameterError("Operation is required")
                context = self._build_context(index, parameters)
                result = await self.registry.dispatch(operation, context)

                if result.success:
                    results.append(NodeItemResult(json=result.data, paired_item=index))
                    continue

                error = result.error or "Unknown error"
                if continue_on_fail:
                    results.append(NodeItemResult(json={"error": error}, paired_item=index))
                    continue
                raise NodeExecutionError(
                    error,
                    description=f"An error occurred while executing the {operation} operation",
                    item_index=index,
                    operation=operation,
                )

            except NodeExecutionError:
                raise
            except Exception as e:
                message = e.message if isinstance(e, BlueConnectorError) else (str(e) or "Unknown error occurred")
                if continue_on_fail:
                    logger.warning("Item %d failed, continuing: %s", index, message)
                    results.append(NodeItemResult(json={"error": message}, paired_item=index))
                    continue
                raise NodeExecutionError(
                    message,
                    description="An error occurred while executing the Blue node",
                    item_index=index,
                    operation=operation,
                ) from e
            finally:
                clear_log_context()

        logger.info("Processed %d item(s)", len(items))
        return results

    def resolver(self, parameters: Mapping[str, Any]) -> ResourceResolver:
        """Resource resolver bound to this node's credentials and transport."""
        options = AdditionalOptions(timeout_ms=self.settings.default_timeout_ms)
        return ResourceResolver(self.credentials, parameters, self.transport, options)

    async def list_search(
        self,
        method: str,
        parameters: Mapping[str, Any],
        filter: Optional[str] = None,
    ) -> ListSearchResult:
        """Run a dropdown search by the host's method name."""
        search = self.resolver(parameters).methods.get(method)
        if search is None:
            return ListSearchResult.single(f"Error: Unknown search method: {method}")
        return await search(filter)
