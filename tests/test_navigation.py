import pytest

from logic.visibility import ADMIN_NAV, NavItem, is_visible, visible_items
from models.profile import Role
from ui.dashboard_core.navigation import NavigationController, PageRegistry


def _keys(role):
    return [item.key for item in visible_items(ADMIN_NAV, {role})]


def test_role_visibility():
    assert _keys(Role.OWNER) == ["home", "customers", "orders", "finance", "settings"]
    assert _keys(Role.MANAGER) == ["home", "customers", "orders", "finance"]
    assert _keys(Role.CS) == ["home", "customers", "orders"]


def test_items_without_roles_are_public():
    assert is_visible(NavItem("help", "Help"), set())
    assert not is_visible(NavItem("x", "X", frozenset({Role.OWNER})), set())


def _registry():
    registry = PageRegistry()
    for item in ADMIN_NAV:
        registry.register(item, lambda ctx, key=item.key: key)
    return registry


def test_registry_rejects_duplicates():
    registry = _registry()
    with pytest.raises(KeyError):
        registry.register(ADMIN_NAV[0], lambda ctx: None)


def test_navigation_refuses_hidden_and_unknown_pages():
    controller = NavigationController(_registry(), {Role.CS})

    with pytest.raises(PermissionError):
        controller.set_current("settings")
    with pytest.raises(KeyError):
        controller.set_current("reports")
    assert controller.current_key is None


def test_listeners_fire_once_per_change():
    controller = NavigationController(_registry(), {Role.OWNER})
    seen = []
    controller.add_listener(seen.append)

    controller.set_current("finance")
    controller.set_current("finance")
    controller.set_current("home")

    assert seen == ["finance", "home"]
    assert controller.visible_keys()[0] == "home"
