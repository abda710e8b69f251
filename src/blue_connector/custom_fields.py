"""Custom field updates for ``updateRecord``.

The host sends one flat mapping per custom field with a ``fieldType``
discriminator and a value sub-field per type. Each type parses into its own
dataclass, which serializes only the values relevant to that type.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Type, Union

from .client.exceptions import ParameterError


def _split_csv(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _number(raw: Mapping[str, Any], key: str, default: float = 0) -> float:
    value = raw.get(key, default)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ParameterError(f"Custom field '{key}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParameterError(f"Custom field '{key}' must be a number, got {value!r}")
    return int(number) if number.is_integer() and not isinstance(value, float) else number


@dataclass(frozen=True)
class TextFieldUpdate:
    field_type: ClassVar[str] = "text"
    field_id: str
    text: str = ""

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "TextFieldUpdate":
        return cls(field_id=field_id, text=str(raw.get("textValue") or ""))

    def to_input(self) -> Dict[str, Any]:
        return {"customFieldId": self.field_id, "text": self.text}


@dataclass(frozen=True)
class NumberFieldUpdate:
    field_type: ClassVar[str] = "number"
    field_id: str
    number: float = 0

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "NumberFieldUpdate":
        return cls(field_id=field_id, number=_number(raw, "numberValue"))

    def to_input(self) -> Dict[str, Any]:
        return {"customFieldId": self.field_id, "number": self.number}


@dataclass(frozen=True)
class SelectionFieldUpdate:
    field_type: ClassVar[str] = "selection"
    field_id: str
    option_ids: tuple = ()

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "SelectionFieldUpdate":
        return cls(field_id=field_id, option_ids=tuple(_split_csv(raw.get("selectionIds"))))

    def to_input(self) -> Dict[str, Any]:
        return {"customFieldId": self.field_id, "customFieldOptionIds": list(self.option_ids)}


@dataclass(frozen=True)
class CheckboxFieldUpdate:
    field_type: ClassVar[str] = "checkbox"
    field_id: str
    checked: bool = False

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "CheckboxFieldUpdate":
        value = raw.get("checkboxValue", False)
        if isinstance(value, str):
            value = value.strip().lower() in ("true", "1", "yes")
        return cls(field_id=field_id, checked=bool(value))

    def to_input(self) -> Dict[str, Any]:
        return {"customFieldId": self.field_id, "checked": self.checked}


@dataclass(frozen=True)
class PhoneFieldUpdate:
    field_type: ClassVar[str] = "phone"
    field_id: str
    phone_number: str = ""
    region_code: str = ""

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "PhoneFieldUpdate":
        return cls(
            field_id=field_id,
            phone_number=str(raw.get("phoneNumber") or ""),
            region_code=str(raw.get("regionCode") or ""),
        )

    def to_input(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"customFieldId": self.field_id, "text": self.phone_number}
        if self.region_code:
            data["regionCode"] = self.region_code
        return data


@dataclass(frozen=True)
class LocationFieldUpdate:
    field_type: ClassVar[str] = "location"
    field_id: str
    latitude: float = 0
    longitude: float = 0
    text: str = ""

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "LocationFieldUpdate":
        latitude = _number(raw, "latitude")
        longitude = _number(raw, "longitude")
        if not -90 <= latitude <= 90:
            raise ParameterError(f"Latitude out of range: {latitude}")
        if not -180 <= longitude <= 180:
            raise ParameterError(f"Longitude out of range: {longitude}")
        return cls(
            field_id=field_id,
            latitude=latitude,
            longitude=longitude,
            text=str(raw.get("locationText") or ""),
        )

    def to_input(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "customFieldId": self.field_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.text:
            data["text"] = self.text
        return data


@dataclass(frozen=True)
class CountriesFieldUpdate:
    field_type: ClassVar[str] = "countries"
    field_id: str
    country_codes: tuple = ()
    text: str = ""

    @classmethod
    def from_raw(cls, field_id: str, raw: Mapping[str, Any]) -> "CountriesFieldUpdate":
        return cls(
            field_id=field_id,
            country_codes=tuple(c.upper() for c in _split_csv(raw.get("countryCodes"))),
            text=str(raw.get("countriesText") or ""),
        )

    def to_input(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "customFieldId": self.field_id,
            "countryCodes": list(self.country_codes),
        }
        if self.text:
            data["text"] = self.text
        return data


CustomFieldUpdate = Union[
    TextFieldUpdate,
    NumberFieldUpdate,
    SelectionFieldUpdate,
    CheckboxFieldUpdate,
    PhoneFieldUpdate,
    LocationFieldUpdate,
    CountriesFieldUpdate,
]

FIELD_TYPES: Dict[str, Type[Any]] = {
    cls.field_type: cls
    for cls in (
        TextFieldUpdate,
        NumberFieldUpdate,
        SelectionFieldUpdate,
        CheckboxFieldUpdate,
        PhoneFieldUpdate,
        LocationFieldUpdate,
        CountriesFieldUpdate,
    )
}


def parse_custom_field(raw: Mapping[str, Any]) -> CustomFieldUpdate:
    """Parse one host entry into the update type named by ``fieldType``."""
    field_id = str(raw.get("fieldId") or "").strip()
    if not field_id:
        raise ParameterError("Custom field ID is required")

    field_type = str(raw.get("fieldType") or "text")
    update_cls = FIELD_TYPES.get(field_type)
    if update_cls is None:
        raise ParameterError(
            f"Unsupported custom field type '{field_type}'. "
            f"Expected one of: {', '.join(FIELD_TYPES)}"
        )
    return update_cls.from_raw(field_id, raw)


def parse_custom_fields(raw: Any) -> List[CustomFieldUpdate]:
    """Parse the host's repeated group.

    Accepts ``{"customField": [...]}`` (the host's fixed-collection shape) or
    a plain list of entries. Missing or empty input yields ``[]``.
    """
    if not raw:
        return []
    if isinstance(raw, Mapping):
        entries = raw.get("customField") or []
    elif isinstance(raw, list):
        entries = raw
    else:
        raise ParameterError("Custom fields must be a list of entries")

    if isinstance(entries, Mapping):
        entries = [entries]
    updates = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ParameterError("Each custom field entry must be an object")
        updates.append(parse_custom_field(entry))
    return updates
