from __future__ import annotations

from pathlib import Path

from optidist_sdk import ApiSession, AuthStore, load_config
from optidist_sdk.models import SessionData, TokenResponse, UserProfile, UserRole


def test_save_load_clear(tmp_path: Path) -> None:
    store = AuthStore(base_dir=tmp_path)
    store.save(SessionData(access_token="abc", user_info=UserProfile(username="dist", role="DISTRIBUTOR")))

    loaded = store.load()
    assert loaded is not None
    assert loaded.access_token == "abc"
    assert loaded.user_info.known_role is UserRole.DISTRIBUTOR

    store.clear()
    assert store.load() is None


def test_corrupt_file_is_discarded(tmp_path: Path) -> None:
    store = AuthStore(base_dir=tmp_path)
    (tmp_path / store.filename).write_text("{not json")
    assert store.load() is None
    assert not (tmp_path / store.filename).exists()


def test_session_restores_from_store(tmp_path: Path) -> None:
    store = AuthStore(base_dir=tmp_path)
    first = ApiSession(load_config(), auth_store=store)
    first.establish(TokenResponse(access="tok", refresh="ref"), UserProfile(username="owner", role="SHOP_OWNER"))

    second = ApiSession(load_config(), auth_store=store)
    assert second.is_authenticated
    assert second.token == "tok"
    assert second.role is UserRole.SHOP_OWNER
    assert second.analytics_client().shop_scope is True

    second.clear()
    assert ApiSession(load_config(), auth_store=store).is_authenticated is False


def test_unknown_role_is_not_routable(tmp_path: Path) -> None:
    session = ApiSession(load_config(), auth_store=AuthStore(base_dir=tmp_path))
    session.establish(TokenResponse(access="tok"), UserProfile(username="x", role="AUDITOR"))
    assert session.is_authenticated
    assert session.role is None
