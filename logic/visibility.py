from __future__ import annotations

"""Capability checks for role-gated navigation entries."""

from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, Iterable, List, Tuple

from models.profile import ALL_ROLES, Role


@dataclass(frozen=True)
class NavItem:
    key: str
    label: str
    required_roles: FrozenSet[Role] = field(default_factory=frozenset)
    tooltip: str = ""
    footer: bool = False


def is_visible(item: NavItem, granted: AbstractSet[Role]) -> bool:
    """An item is shown when the grant intersects its required roles.

    Items without any required role are public.
    """

    if not item.required_roles:
        return True
    return bool(item.required_roles & set(granted))


def visible_items(items: Iterable[NavItem], granted: AbstractSet[Role]) -> List[NavItem]:
    return [item for item in items if is_visible(item, granted)]


ADMIN_NAV: Tuple[NavItem, ...] = (
    NavItem("home", "Dashboard", ALL_ROLES, "Revenue and customer overview"),
    NavItem("customers", "Customers", ALL_ROLES, "Manage your customer database"),
    NavItem("orders", "Orders", ALL_ROLES, "Manage and track all customer orders"),
    NavItem(
        "finance",
        "Finance",
        frozenset({Role.OWNER, Role.MANAGER}),
        "Track your business financial performance",
    ),
    NavItem("settings", "Settings", frozenset({Role.OWNER}), "Timezone and active customers", footer=True),
)


__all__ = ["NavItem", "is_visible", "visible_items", "ADMIN_NAV"]
