"""Tests for parameter extraction and resource-locator normalization."""

import pytest

from blue_connector.client.exceptions import ParameterError
from blue_connector.params import (
    LocatorMode,
    ResourceLocator,
    get_bool,
    get_int,
    get_string,
    normalize_locator,
    require_locator,
)
from blue_connector.types import AdditionalOptions


class TestNormalizeLocator:
    """Both locator shapes collapse to a bare identifier."""

    def test_plain_string(self):
        assert normalize_locator("acme") == "acme"

    def test_list_mode_mapping(self):
        assert normalize_locator({"mode": "list", "value": "c1"}) == "c1"

    def test_id_mode_mapping(self):
        locator = ResourceLocator.from_raw({"mode": "id", "value": "crm-113"})
        assert locator.mode is LocatorMode.ID
        assert locator.value == "crm-113"

    @pytest.mark.parametrize(
        "raw",
        [None, "", {}, {"mode": "list", "value": ""}, {"value": None}, 42, ["c1"], {"value": {"x": 1}}],
    )
    def test_malformed_input_is_empty_not_an_error(self, raw):
        assert normalize_locator(raw) == ""

    def test_unknown_mode_keeps_value(self):
        assert normalize_locator({"mode": "url", "value": "c9"}) == "c9"

    def test_numeric_value_is_stringified(self):
        assert normalize_locator({"mode": "id", "value": 123}) == "123"

    def test_existing_locator_is_returned_unchanged(self):
        locator = ResourceLocator(mode=LocatorMode.LIST, value="p1")
        assert ResourceLocator.from_raw(locator) is locator


class TestRequireLocator:

    def test_returns_value(self):
        assert require_locator({"companyId": {"mode": "list", "value": "c1"}}, "companyId", "Company ID") == "c1"

    def test_missing_raises_parameter_error(self):
        with pytest.raises(ParameterError, match="Company ID is required"):
            require_locator({"companyId": {"mode": "list", "value": ""}}, "companyId", "Company ID")


class TestScalarAccessors:

    def test_get_string_default(self):
        assert get_string({}, "searchTerm") == ""
        assert get_string({"searchTerm": "bug"}, "searchTerm") == "bug"

    def test_get_string_rejects_objects(self):
        with pytest.raises(ParameterError):
            get_string({"title": {"a": 1}}, "title")

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), (False, False), ("true", True), ("False", False), (1, True), (None, False), ("", False)],
    )
    def test_get_bool(self, value, expected):
        assert get_bool({"flag": value}, "flag") is expected

    def test_get_bool_rejects_garbage(self):
        with pytest.raises(ParameterError):
            get_bool({"flag": "maybe"}, "flag")

    def test_get_int_defaults_and_coercion(self):
        assert get_int({}, "limit", default=50) == 50
        assert get_int({"limit": ""}, "limit", default=50) == 50
        assert get_int({"limit": "25"}, "limit") == 25
        assert get_int({"limit": 10.0}, "limit") == 10

    def test_get_int_enforces_minimum(self):
        with pytest.raises(ParameterError, match="at least 1"):
            get_int({"limit": 0}, "limit", minimum=1)

    def test_get_int_rejects_non_numbers(self):
        with pytest.raises(ParameterError):
            get_int({"skip": "ten"}, "skip")
        with pytest.raises(ParameterError):
            get_int({"skip": True}, "skip")


class TestAdditionalOptions:

    def test_defaults(self):
        options = AdditionalOptions.from_raw(None, default_timeout_ms=2000)
        assert options == AdditionalOptions(timeout_ms=2000, full_response=False)
        assert options.timeout_seconds == 2.0

    @pytest.mark.parametrize("raw, expected", [
        (True, True),
        ("true", True),
        ("false", False),
        ("", False),
        (False, False),
    ])
    def test_full_response_flag(self, raw, expected):
        assert AdditionalOptions.from_raw({"fullResponse": raw}).full_response is expected

    def test_timeout_aliases(self):
        assert AdditionalOptions.from_raw({"timeout": "1500"}).timeout_ms == 1500
        assert AdditionalOptions.from_raw({"timeoutMs": 750}).timeout_ms == 750

    def test_non_positive_timeout(self):
        with pytest.raises(ParameterError, match="must be positive"):
            AdditionalOptions.from_raw({"timeout": 0})
