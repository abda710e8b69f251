"""Base operation interface."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..client.exceptions import BlueConnectorError
from ..client.graphql import build_request, normalize_response
from ..types import OperationContext, OperationResult

logger = logging.getLogger(__name__)


class BaseOperation(ABC):
    """Base class for all operations.

    Subclasses implement ``run``: extract parameters, build the document,
    send it and normalize the envelope. ``execute`` wraps ``run`` so that no
    exception leaves the operation; failures come back as
    ``OperationResult(success=False)``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Operation identifier used by the host."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description."""
        pass

    @abstractmethod
    async def run(self, context: OperationContext) -> Any:
        """Execute the pipeline and return the normalized data."""
        pass

    async def execute(self, context: OperationContext) -> OperationResult:
        """Run the operation for one item and convert failures into a result."""
        try:
            data = await self.run(context)
        except BlueConnectorError as e:
            logger.warning(
                "Operation '%s' failed for item %d: %s",
                self.name,
                context.item_index,
                e.message,
            )
            return OperationResult.fail(e.message)
        except Exception as e:
            logger.exception(
                "Unexpected error in operation '%s' for item %d",
                self.name,
                context.item_index,
            )
            return OperationResult.fail(str(e) or type(e).__name__)

        return OperationResult.ok(data)

    async def _send(
        self,
        context: OperationContext,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        company_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send one GraphQL request with the item's credentials and timeout."""
        request = build_request(
            context.credentials,
            query,
            variables=variables,
            company_id=company_id,
        )
        logger.debug(
            "Sending %s request (company scoped: %s)",
            self.name,
            bool(company_id),
        )
        return await context.transport.send(
            request, timeout=context.options.timeout_seconds
        )

    def _normalize(self, context: OperationContext, envelope: Dict[str, Any]) -> Any:
        return normalize_response(envelope, context.options.full_response)
