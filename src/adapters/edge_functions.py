"""
Edge Function Gateway Adapter.

Talks to the hosted edge functions (one function per resource) over HTTP.

Request shape:
- URL: {base_url}{functions_path}/{resource}
- GET / DELETE: `id` and `server_id` as query parameters
- POST / PUT: JSON body
- Headers: `apikey` and `Authorization: Bearer <key>`

Any transport error, non-2xx status or unparseable body becomes a
GatewayError carrying the endpoint's own message where it sends one.
Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.core.ports.gateways import GatewayError, Gateways
from src.domain.entities import Club, Member, Server

logger = logging.getLogger(__name__)

DEFAULT_FUNCTIONS_PATH = "/functions/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _error_message(response: httpx.Response) -> str:
    """Prefer the endpoint's own error text over the bare status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "msg"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return str(value["message"])
    text = response.text.strip()
    if text:
        return text[:200]
    return f"Edge Function returned a non-2xx status code ({response.status_code})"


class EdgeFunctionClient:
    """Thin HTTP wrapper; one instance is shared by the four gateways."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        functions_path: str = DEFAULT_FUNCTIONS_PATH,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/") + functions_path,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
            transport=transport,
        )

    def invoke(
        self,
        resource: str,
        method: str,
        *,
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s params=%s body=%s", method, resource, params, body)
        try:
            response = self._client.request(
                method, f"/{resource}", params=params, json=body
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, resource, e)
            raise GatewayError(resource, method, f"Failed to reach {resource}: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "%s %s returned %s: %s", method, resource, response.status_code, message
            )
            raise GatewayError(resource, method, message, response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(
                resource, method, f"Invalid JSON from {resource}", response.status_code
            ) from e

    def close(self) -> None:
        self._client.close()


def _parse(model: type[Any], data: Any, resource: str, method: str) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Malformed %s response: %s", resource, e)
        raise GatewayError(resource, method, f"Malformed {resource} response") from e


class HttpServerGateway:
    def __init__(self, client: EdgeFunctionClient) -> None:
        self._client = client

    def list_servers(self) -> list[Server]:
        data = self._client.invoke("server", "GET")
        raw = data.get("servers") if isinstance(data, dict) else None
        # A body without a server list must not read as "no servers"
        if not isinstance(raw, list):
            logger.warning("Server response has no servers list: %r", data)
            raise GatewayError("server", "GET", "Malformed server response")
        return [_parse(Server, s, "server", "GET") for s in raw]


class HttpClubGateway:
    def __init__(self, client: EdgeFunctionClient) -> None:
        self._client = client

    def get(self, club_id: str, server_id: str) -> Club:
        data = self._client.invoke(
            "club", "GET", params={"id": club_id, "server_id": server_id}
        )
        club: Club = _parse(Club, data, "club", "GET")
        return club

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = self._client.invoke("club", "POST", body=payload)
        return result

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = self._client.invoke("club", "PUT", body=payload)
        return result

    def delete(self, club_id: str, server_id: str) -> dict[str, Any]:
        result: dict[str, Any] = self._client.invoke(
            "club", "DELETE", params={"id": club_id, "server_id": server_id}
        )
        return result


class HttpMemberGateway:
    def __init__(self, client: EdgeFunctionClient) -> None:
        self._client = client

    def _member(self, data: Any, method: str) -> Member:
        # Some deployments wrap the row as {"member": {...}}
        if isinstance(data, dict) and isinstance(data.get("member"), dict):
            data = data["member"]
        member: Member = _parse(Member, data, "member", method)
        return member

    def create(self, payload: dict[str, Any]) -> Member:
        return self._member(self._client.invoke("member", "POST", body=payload), "POST")

    def update(self, payload: dict[str, Any]) -> Member:
        return self._member(self._client.invoke("member", "PUT", body=payload), "PUT")


class HttpSessionGateway:
    def __init__(self, client: EdgeFunctionClient) -> None:
        self._client = client

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = self._client.invoke("session", "POST", body=payload)
        return result

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = self._client.invoke("session", "PUT", body=payload)
        return result


def create_edge_function_gateways(
    base_url: str,
    api_key: str,
    *,
    functions_path: str = DEFAULT_FUNCTIONS_PATH,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> Gateways:
    """Wire all four gateways to one HTTP client, released by Gateways.close()."""
    client = EdgeFunctionClient(
        base_url,
        api_key,
        functions_path=functions_path,
        timeout=timeout,
        transport=transport,
    )
    return Gateways(
        servers=HttpServerGateway(client),
        clubs=HttpClubGateway(client),
        members=HttpMemberGateway(client),
        sessions=HttpSessionGateway(client),
        closers=(client.close,),
    )
