import pytest

pytest.importorskip("PyQt6.QtWidgets")

import main
from models.profile import Profile, Role
from utils.exceptions import GatewayError


class StubProfiles:
    def __init__(self, profile=None):
        self.profile = profile

    def get_profile(self, profile_id):
        return self.profile


class StubServices:
    def __init__(self, profile=None):
        self.profiles = StubProfiles(profile)


def test_parser_defaults():
    args = main.build_parser().parse_args([])

    assert args.courier is None
    assert args.role == "owner"


def test_parser_rejects_unknown_role():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["--role", "admin"])


def test_resolve_profile_without_id_is_local():
    profile = main.resolve_profile(StubServices(), None, "cs")

    assert profile.role is Role.CS
    assert profile.id == "local"


def test_resolve_profile_from_backend():
    stored = Profile.from_row({"id": "u1", "role": "manager"})

    assert main.resolve_profile(StubServices(stored), "u1", "owner") is stored


def test_resolve_profile_missing_raises():
    with pytest.raises(GatewayError):
        main.resolve_profile(StubServices(), "ghost", "owner")


def test_missing_configuration_exits_with_code_two(monkeypatch):
    monkeypatch.delenv("DD_BACKEND_URL", raising=False)
    monkeypatch.delenv("DD_BACKEND_KEY", raising=False)

    assert main.main([]) == 2
