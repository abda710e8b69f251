"""Searchable dropdown lookups: company -> project -> todo list.

Each search fetches the candidates for the current scope, filters them
client-side with a case-insensitive substring match, and maps them to
``{name, value}`` entries. A search never raises; a missing scope or any
failure becomes a single entry with an empty value.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional

from .client.graphql import build_request, normalize_response
from .params import get_locator
from .query_builder import (
    build_get_companies_query,
    build_get_projects_query,
    build_todo_lists_query,
)
from .types import (
    AdditionalOptions,
    BlueCredentials,
    ListSearchItem,
    ListSearchResult,
    Transport,
)

logger = logging.getLogger(__name__)

SELECT_COMPANY_FIRST = "Please select a company first"
SELECT_PROJECT_FIRST = "Please select a project first"


def _matches(candidate: Mapping[str, Any], filter_text: Optional[str], keys: Iterable[str]) -> bool:
    if not filter_text:
        return True
    needle = filter_text.lower()
    return any(needle in str(candidate.get(key) or "").lower() for key in keys)


def _error_result(exc: Exception) -> ListSearchResult:
    message = str(exc) or type(exc).__name__
    return ListSearchResult.single(f"Error: {message}")


class ResourceResolver:
    """Dropdown searches for one parameter form.

    ``parameters`` holds the sibling values already chosen in the form
    (``companyId``, ``projectId``), in either locator shape.
    """

    def __init__(
        self,
        credentials: BlueCredentials,
        parameters: Mapping[str, Any],
        transport: Transport,
        options: Optional[AdditionalOptions] = None,
    ):
        self.credentials = credentials
        self.parameters = parameters
        self.transport = transport
        self.options = options or AdditionalOptions()

    @property
    def methods(self) -> Dict[str, Callable[[Optional[str]], Awaitable[ListSearchResult]]]:
        """Host method names mapped to the search coroutines."""
        return {
            "searchCompanies": self.search_companies,
            "searchProjects": self.search_projects,
            "searchTodoLists": self.search_todo_lists,
        }

    async def _fetch(self, query: str, company_id: Optional[str] = None) -> Any:
        request = build_request(self.credentials, query, company_id=company_id)
        envelope = await self.transport.send(request, timeout=self.options.timeout_seconds)
        return normalize_response(envelope) or {}

    async def search_companies(self, filter: Optional[str] = None) -> ListSearchResult:
        try:
            data = await self._fetch(build_get_companies_query())
            companies = (data.get("companyList") or {}).get("items") or []
            results = [
                ListSearchItem(
                    name=f"{company.get('name', '')} ({company.get('slug', '')})",
                    value=str(company.get("id", "")),
                )
                for company in companies
                if _matches(company, filter, ("name", "slug"))
            ]
        except Exception as e:
            logger.warning("Company search failed: %s", e)
            return _error_result(e)

        return ListSearchResult(results=results)

    async def search_projects(self, filter: Optional[str] = None) -> ListSearchResult:
        try:
            company_id = get_locator(self.parameters, "companyId")
            if not company_id:
                return ListSearchResult.single(SELECT_COMPANY_FIRST)

            data = await self._fetch(build_get_projects_query(company_id), company_id=company_id)
            projects = (data.get("projectList") or {}).get("items") or []
            results = [
                ListSearchItem(
                    name=f"{project.get('name', '')} ({project.get('slug', '')})",
                    value=str(project.get("id", "")),
                )
                for project in projects
                if _matches(project, filter, ("name", "slug"))
            ]
        except Exception as e:
            logger.warning("Project search failed: %s", e)
            return _error_result(e)

        return ListSearchResult(results=results)

    async def search_todo_lists(self, filter: Optional[str] = None) -> ListSearchResult:
        try:
            company_id = get_locator(self.parameters, "companyId")
            if not company_id:
                return ListSearchResult.single(SELECT_COMPANY_FIRST)
            project_id = get_locator(self.parameters, "projectId")
            if not project_id:
                return ListSearchResult.single(SELECT_PROJECT_FIRST)

            data = await self._fetch(build_todo_lists_query(project_id), company_id=company_id)
            todo_lists: List[Mapping[str, Any]] = data.get("todoLists") or []
            enabled = [
                todo_list
                for todo_list in todo_lists
                if _matches(todo_list, filter, ("title", "uid"))
                and not todo_list.get("isDisabled")
            ]
            enabled.sort(key=lambda todo_list: todo_list.get("position") or 0)
            results = [
                ListSearchItem(
                    name=f"{todo_list.get('title', '')} ({todo_list.get('uid', '')})",
                    value=str(todo_list.get("id", "")),
                )
                for todo_list in enabled
            ]
        except Exception as e:
            logger.warning("Todo list search failed: %s", e)
            return _error_result(e)

        return ListSearchResult(results=results)
