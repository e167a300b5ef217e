"""Recording stand-in for :class:`services.backend_client.BackendClient`."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional


class FakeClient:
    """Answers from canned responses keyed by procedure or table name.

    A canned value that is an exception instance is raised instead.
    """

    def __init__(self, **responses: Any) -> None:
        self.responses: Dict[str, Any] = dict(responses)
        self.calls: List[tuple] = []

    def _answer(self, key: str, default: Any = None) -> Any:
        value = self.responses.get(key, default)
        if isinstance(value, BaseException):
            raise value
        return value

    def rpc(self, name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        self.calls.append(("rpc", name, dict(params or {})))
        return self._answer(name)

    def select_one(self, table: str, *, match: Mapping[str, Any], columns: str = "*") -> Any:
        self.calls.append(("select_one", table, dict(match), columns))
        return self._answer(table)

    def insert(self, table: str, values: Mapping[str, Any]) -> Any:
        self.calls.append(("insert", table, dict(values)))
        return self._answer(f"insert:{table}", {"id": 1, **values})

    def update(self, table: str, values: Mapping[str, Any], *, match: Mapping[str, Any]) -> Any:
        self.calls.append(("update", table, dict(values), dict(match)))
        return self._answer(f"update:{table}", [{"id": next(iter(match.values())), **values}])

    def delete(self, table: str, *, match: Mapping[str, Any]) -> None:
        self.calls.append(("delete", table, dict(match)))
        self._answer(f"delete:{table}")
