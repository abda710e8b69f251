"""GraphQL transport and response handling for the Blue API.

All Blue calls are a single POST to one GraphQL endpoint. The transport
returns the raw ``{data, errors}`` envelope; ``normalize_response`` decides
whether that envelope is a success.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Settings, get_settings
from ..types import BlueCredentials, GraphQLRequest
from .exceptions import (
    GraphQLError,
    TransportAuthError,
    TransportError,
    TransportTimeoutError,
)
from .http_client import get_http_client

logger = logging.getLogger(__name__)

# Status codes reported as authentication failures
AUTH_FAILURE_CODES = {401, 403}


def build_headers(
    credentials: BlueCredentials,
    company_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, str]:
    """Assemble auth headers, adding the company-scope header when given."""
    settings = settings or get_settings()
    headers = {
        settings.token_id_header: credentials.token_id,
        settings.token_secret_header: credentials.token_secret,
        "Content-Type": "application/json",
    }
    if company_id:
        headers[settings.company_header] = company_id
    return headers


def build_request(
    credentials: BlueCredentials,
    query: str,
    variables: Optional[Dict[str, Any]] = None,
    company_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> GraphQLRequest:
    """Build a ``GraphQLRequest`` ready for ``GraphQLTransport.send``."""
    return GraphQLRequest(
        query=query,
        variables=dict(variables or {}),
        headers=build_headers(credentials, company_id, settings),
    )


def normalize_response(envelope: Dict[str, Any], full_response: bool = False) -> Any:
    """Turn a GraphQL envelope into the operation's output.

    Args:
        envelope: Parsed ``{data, errors}`` response body.
        full_response: Return the whole envelope instead of ``data``.

    Returns:
        ``envelope`` when ``full_response`` is set, else ``envelope["data"]``.

    Raises:
        GraphQLError: If ``errors`` is a non-empty list, whatever ``data`` holds.
    """
    errors = envelope.get("errors")
    if errors:
        messages = [
            (e.get("message") if isinstance(e, dict) else None) or "Unknown error"
            for e in errors
        ]
        raise GraphQLError(messages)

    if full_response:
        return envelope
    return envelope.get("data")


class GraphQLTransport:
    """Sends GraphQL requests over the shared HTTP client. Never retries."""

    def __init__(self, endpoint: Optional[str] = None):
        self.endpoint = endpoint or get_settings().api_url

    async def send(
        self,
        request: GraphQLRequest,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """POST the request and return the parsed JSON envelope.

        Args:
            request: Query, variables and headers.
            timeout: Timeout in seconds for this call; None uses the client default.

        Raises:
            TransportAuthError: On 401/403.
            TransportTimeoutError: When the call exceeds ``timeout``.
            TransportError: On any other network failure, non-2xx status,
                or a body that is not a JSON object.
        """
        client = get_http_client()
        try:
            response = await client.post(
                self.endpoint,
                json=request.payload(),
                headers=request.headers,
                timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status in AUTH_FAILURE_CODES:
                raise TransportAuthError(
                    f"Authentication failed: HTTP {status}",
                    status_code=status,
                ) from exc
            raise TransportError(
                f"API error: HTTP {status}",
                status_code=status,
                response_body=exc.response.text[:500],
            ) from exc

        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(
                f"Request timed out after {timeout}s" if timeout else "Request timed out"
            ) from exc

        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request failed: {type(exc).__name__}: {exc}"
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                "Response is not valid JSON",
                status_code=response.status_code,
                response_body=response.text[:500],
            ) from exc

        if not isinstance(body, dict):
            raise TransportError(
                "Response is not a GraphQL envelope",
                status_code=response.status_code,
                response_body=str(body)[:500],
            )

        logger.debug("GraphQL response received (status=%d)", response.status_code)
        return body
