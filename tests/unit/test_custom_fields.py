"""Tests for custom field parsing and per-type serialization."""

import pytest

from blue_connector.client.exceptions import ParameterError
from blue_connector.custom_fields import (
    CheckboxFieldUpdate,
    CountriesFieldUpdate,
    LocationFieldUpdate,
    NumberFieldUpdate,
    PhoneFieldUpdate,
    SelectionFieldUpdate,
    TextFieldUpdate,
    parse_custom_field,
    parse_custom_fields,
)

# Every value sub-field the host form can send, regardless of fieldType.
ALL_VALUES = {
    "textValue": "hello",
    "numberValue": 7,
    "checkboxValue": True,
    "selectionIds": "o1,o2",
    "phoneNumber": "+33642526644",
    "regionCode": "FR",
    "latitude": 48.85,
    "longitude": 2.35,
    "locationText": "Paris",
    "countryCodes": "us, fr",
    "countriesText": "United States, France",
}


class TestParseCustomField:

    def test_number_serializes_only_number(self):
        update = parse_custom_field({"fieldId": "f1", "fieldType": "number", "numberValue": 42})

        assert isinstance(update, NumberFieldUpdate)
        assert update.to_input() == {"customFieldId": "f1", "number": 42}

    def test_number_ignores_other_type_values(self):
        update = parse_custom_field({"fieldId": "f1", "fieldType": "number", **ALL_VALUES})

        data = update.to_input()
        assert data == {"customFieldId": "f1", "number": 7}
        for key in ("text", "checked", "latitude", "longitude", "countryCodes"):
            assert key not in data

    def test_text(self):
        update = parse_custom_field({"fieldId": "f2", "fieldType": "text", **ALL_VALUES})
        assert isinstance(update, TextFieldUpdate)
        assert update.to_input() == {"customFieldId": "f2", "text": "hello"}

    def test_selection_splits_ids(self):
        update = parse_custom_field({"fieldId": "f3", "fieldType": "selection", "selectionIds": " o1, o2 ,,o3"})
        assert isinstance(update, SelectionFieldUpdate)
        assert update.to_input() == {"customFieldId": "f3", "customFieldOptionIds": ["o1", "o2", "o3"]}

    def test_checkbox(self):
        update = parse_custom_field({"fieldId": "f4", "fieldType": "checkbox", "checkboxValue": "true"})
        assert isinstance(update, CheckboxFieldUpdate)
        assert update.to_input() == {"customFieldId": "f4", "checked": True}

    def test_phone(self):
        update = parse_custom_field({"fieldId": "f5", "fieldType": "phone", **ALL_VALUES})
        assert isinstance(update, PhoneFieldUpdate)
        assert update.to_input() == {"customFieldId": "f5", "text": "+33642526644", "regionCode": "FR"}

    def test_location(self):
        update = parse_custom_field({"fieldId": "f6", "fieldType": "location", **ALL_VALUES})
        assert isinstance(update, LocationFieldUpdate)
        assert update.to_input() == {
            "customFieldId": "f6",
            "latitude": 48.85,
            "longitude": 2.35,
            "text": "Paris",
        }

    def test_location_out_of_range(self):
        with pytest.raises(ParameterError, match="Latitude"):
            parse_custom_field({"fieldId": "f6", "fieldType": "location", "latitude": 91, "longitude": 0})

    def test_countries_uppercases_codes(self):
        update = parse_custom_field({"fieldId": "f7", "fieldType": "countries", **ALL_VALUES})
        assert isinstance(update, CountriesFieldUpdate)
        assert update.to_input() == {
            "customFieldId": "f7",
            "countryCodes": ["US", "FR"],
            "text": "United States, France",
        }

    def test_missing_field_id(self):
        with pytest.raises(ParameterError, match="Custom field ID is required"):
            parse_custom_field({"fieldType": "text", "textValue": "x"})

    def test_unknown_field_type(self):
        with pytest.raises(ParameterError, match="Unsupported custom field type 'date'"):
            parse_custom_field({"fieldId": "f1", "fieldType": "date"})

    def test_default_type_is_text(self):
        assert isinstance(parse_custom_field({"fieldId": "f1", "textValue": "x"}), TextFieldUpdate)


class TestParseCustomFields:

    def test_fixed_collection_shape(self):
        updates = parse_custom_fields({
            "customField": [
                {"fieldId": "a", "fieldType": "text", "textValue": "x"},
                {"fieldId": "b", "fieldType": "checkbox", "checkboxValue": False},
            ]
        })
        assert [u.field_id for u in updates] == ["a", "b"]

    def test_plain_list(self):
        updates = parse_custom_fields([{"fieldId": "a", "fieldType": "number", "numberValue": "3.5"}])
        assert updates[0].to_input() == {"customFieldId": "a", "number": 3.5}

    @pytest.mark.parametrize("raw", [None, {}, [], {"customField": []}])
    def test_empty(self, raw):
        assert parse_custom_fields(raw) == []

    def test_rejects_non_object_entries(self):
        with pytest.raises(ParameterError):
            parse_custom_fields(["not-an-object"])
