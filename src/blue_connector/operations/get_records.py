"""Query records (todos) of a company with optional project and text filters."""

import logging
from typing import Any

from ..params import get_bool, get_int, get_locator, get_string, require_locator
from ..query_builder import build_get_records_query
from ..types import OperationContext
from .base import BaseOperation
from .registry import register_operation

logger = logging.getLogger(__name__)


@register_operation
class GetRecordsOperation(BaseOperation):
    """Records sorted by due date then position.

    A search that matches nothing is an ordinary success with an empty
    ``items`` list.
    """

    @property
    def name(self) -> str:
        return "getRecords"

    @property
    def description(self) -> str:
        return "Retrieve records (todos/tasks) with advanced filtering"

    async def run(self, context: OperationContext) -> Any:
        params = context.parameters
        company_id = require_locator(params, "companyId", "Company ID")
        project_id = get_locator(params, "projectId")
        search_term = get_string(params, "searchTerm").strip()
        show_completed = get_bool(params, "showCompleted", default=False)
        limit = get_int(params, "limit", default=50, minimum=1)
        skip = get_int(params, "skip", default=0)

        logger.debug(
            "Fetching records (project filter: %s, search: %s, limit=%d, skip=%d)",
            bool(project_id),
            bool(search_term),
            limit,
            skip,
        )
        query = build_get_records_query(
            company_id,
            project_id=project_id,
            search_term=search_term,
            show_completed=show_completed,
            limit=limit,
            skip=skip,
        )
        envelope = await self._send(context, query, company_id=company_id)
        return self._normalize(context, envelope)
