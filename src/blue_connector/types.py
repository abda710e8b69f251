"""Data models shared by operations, the resolver and the node loop."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol

from .client.exceptions import ParameterError
from .params import get_bool


@dataclass(frozen=True)
class BlueCredentials:
    """API token pair issued by Blue."""

    token_id: str
    token_secret: str

    def __repr__(self) -> str:
        return f"BlueCredentials(token_id={self.token_id!r}, token_secret='***')"

    @classmethod
    def from_settings(cls, settings=None) -> "BlueCredentials":
        """Build credentials from ``BLUE_TOKEN_ID`` / ``BLUE_TOKEN_SECRET``."""
        if settings is None:
            from .config import get_settings

            settings = get_settings()
        if not settings.token_id or not settings.token_secret:
            raise ParameterError("Blue API token id and secret are not configured")
        return cls(token_id=settings.token_id, token_secret=settings.token_secret)


@dataclass(frozen=True)
class AdditionalOptions:
    """Per-item request options."""

    timeout_ms: int = 30000
    full_response: bool = False

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @classmethod
    def from_raw(
        cls,
        raw: Optional[Mapping[str, Any]],
        default_timeout_ms: int = 30000,
    ) -> "AdditionalOptions":
        """Build options from the host's ``additionalOptions`` bag.

        Accepts ``timeout`` (the host's name) or ``timeoutMs``; unknown
        keys are ignored.
        """
        raw = raw or {}
        timeout = raw.get("timeout", raw.get("timeoutMs", default_timeout_ms))
        try:
            timeout_ms = int(timeout)
        except (TypeError, ValueError):
            raise ParameterError(f"Invalid timeout: {timeout!r}")
        if timeout_ms <= 0:
            raise ParameterError(f"Timeout must be positive, got {timeout_ms}")
        return cls(
            timeout_ms=timeout_ms,
            full_response=get_bool(raw, "fullResponse", default=False),
        )


@dataclass
class GraphQLRequest:
    """A single GraphQL POST: document text, variables and headers."""

    query: str
    variables: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)

    def payload(self) -> Dict[str, Any]:
        """JSON body sent to the endpoint."""
        return {"query": self.query, "variables": self.variables}


class Transport(Protocol):
    """Sends a GraphQL request and returns the parsed response envelope."""

    async def send(
        self,
        request: GraphQLRequest,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class OperationContext:
    """Everything an operation needs to process one input item."""

    item_index: int
    credentials: BlueCredentials
    parameters: Mapping[str, Any]
    transport: Transport
    options: AdditionalOptions = field(default_factory=AdditionalOptions)


@dataclass
class OperationResult:
    """Outcome of one operation; ``data`` or ``error`` depending on ``success``."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)


@dataclass
class ListSearchItem:
    """One dropdown entry: display label and identifier."""

    name: str
    value: str


@dataclass
class ListSearchResult:
    """Ordered dropdown entries returned to the host."""

    results: List[ListSearchItem] = field(default_factory=list)

    @classmethod
    def single(cls, name: str, value: str = "") -> "ListSearchResult":
        return cls(results=[ListSearchItem(name=name, value=value)])

    def to_dict(self) -> Dict[str, Any]:
        return {"results": [{"name": r.name, "value": r.value} for r in self.results]}


@dataclass
class NodeItemResult:
    """Per-item output record handed back to the host."""

    json: Any
    paired_item: int

    def to_dict(self) -> Dict[str, Any]:
        return {"json": self.json, "pairedItem": {"item": self.paired_item}}
