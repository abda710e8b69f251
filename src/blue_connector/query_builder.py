"""GraphQL document construction for Blue operations.

Parameter values are written into the document as GraphQL literals through
``render_value``, which quotes and escapes strings and leaves numbers,
booleans and enum values bare. Field sets are fixed; downstream workflows
depend on the exact output shape.
"""

import json
import math
import re
from typing import Any, Dict, Mapping, Optional, Sequence

from .client.exceptions import ParameterError

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class GraphQLEnum(str):
    """An enum value, rendered without quotes."""

    def __new__(cls, value: str):
        if not _NAME_RE.match(value):
            raise ParameterError(f"Invalid GraphQL enum value: {value!r}")
        return super().__new__(cls, value)


def render_string(value: str) -> str:
    """Quote a string as a GraphQL string literal."""
    # JSON string escaping is a subset of GraphQL's StringValue grammar.
    return json.dumps(value, ensure_ascii=False)


def render_value(value: Any) -> str:
    """Render a Python value as a GraphQL input literal."""
    if value is None:
        return "null"
    if isinstance(value, GraphQLEnum):
        return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParameterError(f"Cannot send non-finite number: {value}")
        return repr(value)
    if isinstance(value, str):
        return render_string(value)
    if isinstance(value, Mapping):
        return render_object(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(v) for v in value) + "]"
    raise ParameterError(f"Cannot render {type(value).__name__} as a GraphQL literal")


def render_object(fields: Mapping[str, Any]) -> str:
    parts = []
    for key, value in fields.items():
        if not _NAME_RE.match(key):
            raise ParameterError(f"Invalid GraphQL field name: {key!r}")
        parts.append(f"{key}: {render_value(value)}")
    return "{" + ", ".join(parts) + "}"


def _render_args(args: Mapping[str, Any], indent: str) -> str:
    return "\n".join(f"{indent}{key}: {render_value(value)}" for key, value in args.items())


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------

GET_COMPANIES_QUERY = """query GetCompanies {
  companyList {
    items {
      id
      name
      slug
      description
      createdAt
    }
  }
}"""


def build_get_companies_query() -> str:
    return GET_COMPANIES_QUERY


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

PROJECT_SORT = [GraphQLEnum("position_ASC"), GraphQLEnum("name_ASC")]

_PROJECT_FIELDS = """    items {
      id
      name
      slug
      position
      archived
    }
    totalCount
    pageInfo {
      totalItems
      hasNextPage
    }"""


def project_filter(company_id: str) -> Dict[str, Any]:
    """Filter for active, non-template projects of exactly one company."""
    return {
        "companyIds": [company_id],
        "archived": False,
        "isTemplate": False,
    }


def build_get_projects_query(company_id: str, skip: int = 0, take: int = 50) -> str:
    if not company_id:
        raise ParameterError("Company ID is required")
    args = _render_args(
        {
            "filter": project_filter(company_id),
            "sort": PROJECT_SORT,
            "skip": skip,
            "take": take,
        },
        indent="    ",
    )
    return (
        "query FilteredProjectList {\n"
        "  projectList(\n"
        f"{args}\n"
        "  ) {\n"
        f"{_PROJECT_FIELDS}\n"
        "  }\n"
        "}"
    )


# ---------------------------------------------------------------------------
# Records (todos)
# ---------------------------------------------------------------------------

RECORD_SORT = [GraphQLEnum("duedAt_ASC"), GraphQLEnum("position_ASC")]

_RECORD_FIELDS = """      items {
        id
        uid
        position
        title
        text
        html
        startedAt
        duedAt
        timezone
        color
        cover
        done
        archived
        createdAt
        updatedAt
        commentCount
        checklistCount
        checklistCompletedCount
        isRepeating
        todoList {
          id
          title
        }
        users {
          id
          username
          email
        }
        tags {
          id
          title
          color
        }
        customFields {
          id
          name
          type
          value
          text
          number
          latitude
          longitude
          currency
        }
        createdBy {
          id
          username
        }
      }
      pageInfo {
        totalPages
        totalItems
        page
        perPage
        hasNextPage
        hasPreviousPage
      }"""


def record_filter(
    company_id: str,
    project_id: str = "",
    search_term: str = "",
    show_completed: bool = False,
) -> Dict[str, Any]:
    """Records filter; ``projectIds`` and ``search`` only when supplied."""
    filter_: Dict[str, Any] = {"companyIds": [company_id]}
    if project_id:
        filter_["projectIds"] = [project_id]
    filter_["showCompleted"] = bool(show_completed)
    filter_["excludeArchivedProjects"] = True
    if search_term:
        filter_["search"] = search_term
    return filter_


def build_get_records_query(
    company_id: str,
    project_id: str = "",
    search_term: str = "",
    show_completed: bool = False,
    limit: int = 50,
    skip: int = 0,
) -> str:
    if not company_id:
        raise ParameterError("Company ID is required")
    args = _render_args(
        {
            "filter": record_filter(company_id, project_id, search_term, show_completed),
            "sort": RECORD_SORT,
            "limit": limit,
            "skip": skip,
        },
        indent="      ",
    )
    return (
        "query ListRecordsAdvanced {\n"
        "  todoQueries {\n"
        "    todos(\n"
        f"{args}\n"
        "    ) {\n"
        f"{_RECORD_FIELDS}\n"
        "    }\n"
        "  }\n"
        "}"
    )


# ---------------------------------------------------------------------------
# Update record
# ---------------------------------------------------------------------------

_UPDATED_RECORD_FIELDS = """    id
    uid
    title
    text
    position
    startedAt
    duedAt
    color
    done
    updatedAt
    todoList {
      id
      title
    }
    customFields {
      id
      name
      type
      value
    }"""


def build_update_record_input(
    record_id: str,
    title: str = "",
    description: str = "",
    start_date: str = "",
    due_date: str = "",
    position: Optional[float] = None,
    color: str = "",
    project_id: str = "",
    todo_list_id: str = "",
    custom_fields: Sequence[Any] = (),
) -> Dict[str, Any]:
    """Input object for ``editTodo``; unset values are left out entirely."""
    if not record_id:
        raise ParameterError("Record ID is required")
    data: Dict[str, Any] = {"todoId": record_id}
    if title:
        data["title"] = title
    if description:
        data["text"] = description
    if start_date:
        data["startedAt"] = start_date
    if due_date:
        data["duedAt"] = due_date
    if position is not None:
        data["position"] = position
    if color:
        data["color"] = color
    if project_id:
        data["projectId"] = project_id
    if todo_list_id:
        data["todoListId"] = todo_list_id
    if custom_fields:
        data["customFields"] = [field.to_input() for field in custom_fields]
    return data


def build_update_record_mutation(update_input: Mapping[str, Any]) -> str:
    return (
        "mutation UpdateRecord {\n"
        f"  editTodo(input: {render_object(update_input)}) {{\n"
        f"{_UPDATED_RECORD_FIELDS}\n"
        "  }\n"
        "}"
    )


# ---------------------------------------------------------------------------
# Todo lists (resource resolver)
# ---------------------------------------------------------------------------

def build_todo_lists_query(project_id: str) -> str:
    if not project_id:
        raise ParameterError("Project ID is required")
    return (
        "query GetProjectLists {\n"
        f"  todoLists(projectId: {render_string(project_id)}) {{\n"
        "    id\n"
        "    uid\n"
        "    title\n"
        "    position\n"
        "    isDisabled\n"
        "    isLocked\n"
        "    createdAt\n"
        "    updatedAt\n"
        "  }\n"
        "}"
    )


# ---------------------------------------------------------------------------
# Custom query
# ---------------------------------------------------------------------------

def parse_variables(raw: Any) -> Dict[str, Any]:
    """Parse the user's variables into a mapping.

    Accepts JSON text or an already-decoded mapping. Empty input means no
    variables. Malformed JSON or a non-object value is a ParameterError.
    """
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str):
        raise ParameterError("Variables must be a JSON object")
    if not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParameterError(f"Invalid JSON in variables: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise ParameterError("Variables must be a JSON object")
    return parsed


def operation_name(document: str) -> str:
    """Name of the first operation declared in a document, for logging."""
    match = re.search(r"\b(?:query|mutation|subscription)\s+([_A-Za-z][_0-9A-Za-z]*)", document)
    return match.group(1) if match else "anonymous"
