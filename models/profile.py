from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Mapping


class Role(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"
    CS = "cs"


ALL_ROLES: FrozenSet[Role] = frozenset(Role)


@dataclass(frozen=True)
class Profile:
    id: str
    first_name: str
    last_name: str
    display_name: str
    role: Role
    email: str = ""

    @property
    def capabilities(self) -> FrozenSet[Role]:
        return frozenset({self.role})

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Profile":
        return cls(
            id=str(row["id"]),
            first_name=str(row.get("first_name") or ""),
            last_name=str(row.get("last_name") or ""),
            display_name=str(row.get("display_name") or ""),
            role=Role(row.get("role") or Role.CS.value),
            email=str(row.get("email") or ""),
        )

    @classmethod
    def local(cls, role: Role) -> "Profile":
        """Offline profile used when no profile id is supplied."""

        return cls(id="local", first_name="", last_name="", display_name=role.value.title(), role=role)


__all__ = ["Role", "Profile", "ALL_ROLES"]
