"""Run a user-supplied GraphQL document."""

import logging
from typing import Any

from ..client.exceptions import ParameterError
from ..params import get_locator, get_string
from ..query_builder import operation_name, parse_variables
from ..types import OperationContext
from .base import BaseOperation
from .registry import register_operation

logger = logging.getLogger(__name__)


@register_operation
class CustomQueryOperation(BaseOperation):
    """The query text and variables are passed through unmodified.

    The company-scope header is added when a company is given.
    """

    @property
    def name(self) -> str:
        return "customQuery"

    @property
    def description(self) -> str:
        return "Execute a custom GraphQL query"

    async def run(self, context: OperationContext) -> Any:
        params = context.parameters
        query = get_string(params, "query")
        if not query.strip():
            raise ParameterError("GraphQL query is required")
        variables = parse_variables(params.get("variables"))
        company_id = get_locator(params, "companyId")

        logger.debug("Running custom query '%s'", operation_name(query))
        envelope = await self._send(
            context, query, variables=variables, company_id=company_id or None
        )
        return self._normalize(context, envelope)
