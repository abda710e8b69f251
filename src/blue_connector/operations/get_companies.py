"""List every company the API token can access."""

from typing import Any

from ..query_builder import build_get_companies_query
from ..types import OperationContext
from .base import BaseOperation
from .registry import register_operation


@register_operation
class GetCompaniesOperation(BaseOperation):

    @property
    def name(self) -> str:
        return "getCompanies"

    @property
    def description(self) -> str:
        return "List all companies you have access to"

    async def run(self, context: OperationContext) -> Any:
        envelope = await self._send(context, build_get_companies_query())
        return self._normalize(context, envelope)
