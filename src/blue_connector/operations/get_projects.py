"""List the active projects of one company."""

from typing import Any

from ..params import get_int, require_locator
from ..query_builder import build_get_projects_query
from ..types import OperationContext
from .base import BaseOperation
from .registry import register_operation


@register_operation
class GetProjectsOperation(BaseOperation):
    """Non-archived, non-template projects, ordered by position then name."""

    @property
    def name(self) -> str:
        return "getProjects"

    @property
    def description(self) -> str:
        return "Retrieve all projects"

    async def run(self, context: OperationContext) -> Any:
        params = context.parameters
        company_id = require_locator(params, "companyId", "Company ID")
        skip = get_int(params, "skip", default=0)
        take = get_int(params, "take", default=50, minimum=1)

        query = build_get_projects_query(company_id, skip=skip, take=take)
        envelope = await self._send(context, query, company_id=company_id)
        return self._normalize(context, envelope)
