from __future__ import annotations

"""Thin ``requests`` wrapper around the hosted REST + RPC backend."""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import requests

from utils.config import AppConfig, DEFAULT_TIMEOUT
from utils.exceptions import GatewayError

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"
RPC_ERROR = "RPC_ERROR"


def unwrap_envelope(payload: Any, *, default_code: str = RPC_ERROR) -> Any:
    """Return ``data`` from a ``{success, data, error}`` envelope.

    Payloads without a ``success`` key are returned unchanged, so plain RPC
    results (a number, a list of rows) pass straight through.
    """

    if not isinstance(payload, Mapping) or "success" not in payload:
        return payload
    if not payload.get("success"):
        raise GatewayError.from_payload(payload, default_code=default_code)
    return payload.get("data")


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """``"0-9/42"`` -> ``42``; ``None`` when the total is unknown (``*``)."""

    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        return None
    return int(total)


def _eq_filters(match: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    return {column: f"eq.{value}" for column, value in (match or {}).items()}


class BackendClient:
    """Speaks to ``/rest/v1`` (tables) and ``/rest/v1/rpc`` (procedures).

    Every failure surfaces as :class:`GatewayError`: network problems as
    ``NETWORK_ERROR``, non-2xx answers with the backend's own code when the
    body carries one and ``HTTP_<status>`` otherwise.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        access_token: Optional[str] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.access_token = access_token

    @classmethod
    def from_config(cls, config: AppConfig) -> "BackendClient":
        return cls(config.backend_url, config.backend_key, timeout=config.request_timeout)

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}/rest/v1{path}"

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json_data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        url = self._url(path)
        try:
            response = requests.request(
                method,
                url,
                params=params,
                json=json_data,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise GatewayError(NETWORK_ERROR, "Could not reach the server") from exc
        if 200 <= response.status_code < 300:
            return response
        payload = self._decode(response)
        logger.warning("%s %s returned HTTP %s", method, path, response.status_code)
        raise GatewayError.from_payload(
            payload,
            default_code=f"HTTP_{response.status_code}",
            status=response.status_code,
        )

    # -- procedures -------------------------------------------------------

    def rpc(self, name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a remote procedure and return its decoded JSON result."""

        response = self._request("POST", f"/rpc/{name}", json_data=dict(params or {}))
        return self._decode(response)

    # -- tables -----------------------------------------------------------

    def select(
        self,
        table: str,
        *,
        columns: str = "*",
        match: Optional[Mapping[str, Any]] = None,
        order: Optional[Iterable[Tuple[str, str]]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        rows, _total = self._select(table, columns, match, order, limit, offset, count=False)
        return rows

    def select_page(
        self,
        table: str,
        *,
        columns: str = "*",
        match: Optional[Mapping[str, Any]] = None,
        order: Optional[Iterable[Tuple[str, str]]] = None,
        limit: int,
        offset: int = 0,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Like :meth:`select` but also returns the exact row count."""

        rows, total = self._select(table, columns, match, order, limit, offset, count=True)
        return rows, len(rows) + offset if total is None else total

    def select_one(self, table: str, *, match: Mapping[str, Any], columns: str = "*") -> Optional[Dict[str, Any]]:
        rows = self.select(table, columns=columns, match=match, limit=1)
        return rows[0] if rows else None

    def _select(
        self,
        table: str,
        columns: str,
        match: Optional[Mapping[str, Any]],
        order: Optional[Iterable[Tuple[str, str]]],
        limit: Optional[int],
        offset: Optional[int],
        *,
        count: bool,
    ) -> Tuple[List[Dict[str, Any]], Optional[int]]:
        params: Dict[str, Any] = {"select": columns, **_eq_filters(match)}
        if order:
            params["order"] = ",".join(f"{column}.{direction}" for column, direction in order)
        if limit is not None:
            params["limit"] = limit
        if offset:
            params["offset"] = offset
        headers = {"Prefer": "count=exact"} if count else None
        response = self._request("GET", f"/{table}", params=params, headers=headers)
        rows = self._decode(response) or []
        total = parse_content_range(response.headers.get("Content-Range")) if count else None
        return list(rows), total

    def insert(self, table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""

        response = self._request(
            "POST",
            f"/{table}",
            json_data=[dict(values)],
            headers={"Prefer": "return=representation"},
        )
        rows = self._decode(response) or []
        if not rows:
            raise GatewayError("EMPTY_RESPONSE", f"Insert into {table} returned no row")
        return rows[0]

    def update(self, table: str, values: Mapping[str, Any], *, match: Mapping[str, Any]) -> List[Dict[str, Any]]:
        if not match:
            raise ValueError("update requires a match filter")
        response = self._request(
            "PATCH",
            f"/{table}",
            params=_eq_filters(match),
            json_data=dict(values),
            headers={"Prefer": "return=representation"},
        )
        return list(self._decode(response) or [])

    def delete(self, table: str, *, match: Mapping[str, Any]) -> None:
        if not match:
            raise ValueError("delete requires a match filter")
        self._request("DELETE", f"/{table}", params=_eq_filters(match))


__all__ = [
    "BackendClient",
    "unwrap_envelope",
    "parse_content_range",
    "NETWORK_ERROR",
    "RPC_ERROR",
]
