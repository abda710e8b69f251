"""Update a record's fields, move it, and set custom field values."""

import logging
from typing import Any, Mapping, Optional

from ..client.exceptions import ParameterError
from ..custom_fields import parse_custom_fields
from ..params import get_locator, get_string, require_locator
from ..query_builder import build_update_record_input, build_update_record_mutation
from ..types import OperationContext
from .base import BaseOperation
from .registry import register_operation

logger = logging.getLogger(__name__)


def _position(parameters: Mapping[str, Any]) -> Optional[float]:
    """``position`` defaults to ``""`` in the host form, meaning unchanged."""
    value = parameters.get("position")
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ParameterError("Parameter 'position' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParameterError(f"Parameter 'position' must be a number, got {value!r}")
    return int(number) if number.is_integer() else number


@register_operation
class UpdateRecordOperation(BaseOperation):
    """Edit a record. Only supplied values are sent; everything else is left as is."""

    @property
    def name(self) -> str:
        return "updateRecord"

    @property
    def description(self) -> str:
        return "Update a record (todo/task) with custom fields"

    async def run(self, context: OperationContext) -> Any:
        params = context.parameters
        company_id = require_locator(params, "companyId", "Company ID")
        record_id = get_string(params, "recordId").strip()
        if not record_id:
            raise ParameterError("Record ID is required")

        custom_fields = parse_custom_fields(params.get("customFields"))
        update_input = build_update_record_input(
            record_id,
            title=get_string(params, "title"),
            description=get_string(params, "description"),
            start_date=get_string(params, "startDate"),
            due_date=get_string(params, "dueDate"),
            position=_position(params),
            color=get_string(params, "color").strip(),
            project_id=get_locator(params, "projectId"),
            todo_list_id=get_locator(params, "todoListId"),
            custom_fields=custom_fields,
        )
        logger.debug(
            "Updating record with %d field(s) and %d custom field(s)",
            len(update_input) - 1,
            len(custom_fields),
        )

        mutation = build_update_record_mutation(update_input)
        envelope = await self._send(context, mutation, company_id=company_id)
        return self._normalize(context, envelope)
