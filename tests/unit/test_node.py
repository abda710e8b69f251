"""Tests for the BlueNode item loop and dropdown entry point."""

from unittest.mock import patch

import pytest

from blue_connector.client.exceptions import NodeExecutionError, ParameterError
from blue_connector.config import Settings
from blue_connector.node import BlueNode
from blue_connector.types import ListSearchItem

pytestmark = pytest.mark.asyncio

COMPANIES = {"companyList": {"items": [{"id": "c1", "name": "Acme", "slug": "acme"}]}}


@pytest.fixture
def node(credentials, transport):
    return BlueNode(credentials, transport=transport, settings=Settings(_env_file=None))


async def test_get_companies_end_to_end(node, transport):
    transport.send.return_value = {"data": COMPANIES}

    results = await node.execute([{"operation": "getCompanies"}])

    assert len(results) == 1
    assert results[0].json == COMPANIES
    assert results[0].to_dict() == {"json": COMPANIES, "pairedItem": {"item": 0}}


async def test_items_processed_in_order(node, transport):
    transport.send.side_effect = [
        {"data": {"n": 1}},
        {"data": {"n": 2}},
        {"data": {"n": 3}},
    ]

    results = await node.execute([{"operation": "getCompanies"}] * 3)

    assert [r.json for r in results] == [{"n": 1}, {"n": 2}, {"n": 3}]
    assert [r.paired_item for r in results] == [0, 1, 2]
    assert transport.send.await_count == 3


async def test_additional_options_applied(node, transport):
    transport.send.return_value = {"data": COMPANIES, "extensions": {}}
    item = {"operation": "getCompanies", "additionalOptions": {"timeout": 5000, "fullResponse": True}}

    results = await node.execute([item])

    assert transport.send.call_args.kwargs["timeout"] == 5.0
    assert results[0].json == {"data": COMPANIES, "extensions": {}}


async def test_default_timeout_from_settings(credentials, transport):
    node = BlueNode(credentials, transport=transport, settings=Settings(_env_file=None, default_timeout_ms=2000))

    await node.execute([{"operation": "getCompanies"}])

    assert transport.send.call_args.kwargs["timeout"] == 2.0


async def test_failure_stops_batch(node, transport):
    items = [
        {"operation": "updateRecord", "companyId": "c1"},
        {"operation": "getCompanies"},
    ]

    with pytest.raises(NodeExecutionError) as exc_info:
        await node.execute(items)

    error = exc_info.value
    assert error.message == "Record ID is required"
    assert error.description == "An error occurred while executing the updateRecord operation"
    assert error.item_index == 0
    transport.send.assert_not_awaited()


async def test_continue_on_fail_records_error(node, transport):
    transport.send.side_effect = [
        {"errors": [{"message": "Forbidden"}]},
        {"data": COMPANIES},
    ]

    results = await node.execute(
        [{"operation": "getCompanies"}, {"operation": "getCompanies"}],
        continue_on_fail=True,
    )

    assert [r.to_dict() for r in results] == [
        {"json": {"error": "Forbidden"}, "pairedItem": {"item": 0}},
        {"json": COMPANIES, "pairedItem": {"item": 1}},
    ]


async def test_unknown_operation(node, transport):
    with pytest.raises(NodeExecutionError) as exc_info:
        await node.execute([{"operation": "doesNotExist"}])

    assert exc_info.value.message == "Unknown operation: doesNotExist"
    assert exc_info.value.description == "An error occurred while executing the Blue node"
    transport.send.assert_not_awaited()


async def test_unknown_operation_continue_on_fail(node, transport):
    results = await node.execute([{"operation": "doesNotExist"}], continue_on_fail=True)
    assert results[0].json == {"error": "Unknown operation: doesNotExist"}


async def test_missing_operation(node):
    with pytest.raises(NodeExecutionError, match="Operation is required"):
        await node.execute([{}])


async def test_invalid_timeout_is_item_failure(node, transport):
    results = await node.execute(
        [{"operation": "getCompanies", "additionalOptions": {"timeout": "soon"}}],
        continue_on_fail=True,
    )

    assert results[0].json == {"error": "Invalid timeout: 'soon'"}
    transport.send.assert_not_awaited()


async def test_empty_batch(node, transport):
    assert await node.execute([]) == []


class TestListSearch:

    async def test_dispatches_by_method_name(self, node, transport):
        transport.send.return_value = {"data": COMPANIES}

        result = await node.list_search("searchCompanies", {}, "acm")

        assert result.to_dict() == {"results": [{"name": "Acme (acme)", "value": "c1"}]}

    async def test_scope_sentinel(self, node, transport):
        result = await node.list_search("searchTodoLists", {"companyId": "c1"})

        assert result.results == [ListSearchItem(name="Please select a project first", value="")]

    async def test_unknown_method(self, node):
        result = await node.list_search("searchTags", {})

        assert result.results == [ListSearchItem(name="Error: Unknown search method: searchTags", value="")]


class TestFromSettings:

    async def test_reads_tokens_and_configures_logging(self):
        settings = Settings(_env_file=None, token_id="tid", token_secret="tsecret", log_level="DEBUG")

        with patch("blue_connector.node.configure_logging") as mock_configure:
            node = BlueNode.from_settings(settings)

        mock_configure.assert_called_once_with(settings)
        assert node.credentials.token_id == "tid"
        assert node.transport.endpoint == "https://api.blue.cc/graphql"

    async def test_missing_tokens(self):
        with patch("blue_connector.node.configure_logging"):
            with pytest.raises(ParameterError, match="not configured"):
                BlueNode.from_settings(Settings(_env_file=None))

    async def test_context_manager_releases_client(self, node):
        with patch("blue_connector.node.close_http_client") as mock_close:
            async with node as entered:
                assert entered is node

        mock_close.assert_awaited_once()
