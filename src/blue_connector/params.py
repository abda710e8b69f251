"""Parameter extraction from the host's loosely typed parameter bag.

Identifiers such as company, project and todo list arrive either as a bare
string or as a resource-locator mapping ``{"mode": "list"|"id", "value": ...}``.
Both shapes normalize to a plain identifier.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from .client.exceptions import ParameterError


class LocatorMode(str, Enum):
    """How the user picked the identifier."""
    LIST = "list"
    ID = "id"


@dataclass(frozen=True)
class ResourceLocator:
    """A normalized resource locator."""

    mode: LocatorMode
    value: str

    @property
    def is_empty(self) -> bool:
        return not self.value

    @classmethod
    def from_raw(cls, raw: Union[str, Mapping[str, Any], "ResourceLocator", None]) -> "ResourceLocator":
        """Parse either locator shape. Never raises; bad input gives an empty locator."""
        if isinstance(raw, ResourceLocator):
            return raw
        if isinstance(raw, str):
            return cls(mode=LocatorMode.ID, value=raw)
        if isinstance(raw, Mapping):
            value = raw.get("value")
            if not value or isinstance(value, (Mapping, list, bool)):
                return cls(mode=LocatorMode.LIST, value="")
            try:
                mode = LocatorMode(raw.get("mode", LocatorMode.LIST.value))
            except (TypeError, ValueError):
                mode = LocatorMode.ID
            return cls(mode=mode, value=str(value))
        return cls(mode=LocatorMode.LIST, value="")


def normalize_locator(raw: Any) -> str:
    """Return the plain identifier for either locator shape, or ``""``."""
    return ResourceLocator.from_raw(raw).value


def get_locator(parameters: Mapping[str, Any], name: str) -> str:
    """Normalized identifier for ``name``; empty when absent."""
    return normalize_locator(parameters.get(name))


def require_locator(parameters: Mapping[str, Any], name: str, label: str) -> str:
    """Normalized identifier for ``name``; ParameterError when empty."""
    value = get_locator(parameters, name)
    if not value:
        raise ParameterError(f"{label} is required")
    return value


def get_string(parameters: Mapping[str, Any], name: str, default: str = "") -> str:
    value = parameters.get(name)
    if value is None:
        return default
    if isinstance(value, (Mapping, list)):
        raise ParameterError(f"Parameter '{name}' must be a string")
    return str(value)


def get_bool(parameters: Mapping[str, Any], name: str, default: bool = False) -> bool:
    value = parameters.get(name)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    raise ParameterError(f"Parameter '{name}' must be a boolean")


def get_int(
    parameters: Mapping[str, Any],
    name: str,
    default: int = 0,
    minimum: int = 0,
) -> int:
    """Integer parameter; ``""`` and missing mean ``default``."""
    value = parameters.get(name)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ParameterError(f"Parameter '{name}' must be a number")
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        raise ParameterError(f"Parameter '{name}' must be a number, got {value!r}")
    if number < minimum:
        raise ParameterError(f"Parameter '{name}' must be at least {minimum}")
    return number
