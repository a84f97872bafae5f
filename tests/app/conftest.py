from __future__ import annotations

from pathlib import Path

import pytest

from optidist_sdk import ApiSession, AuthStore, load_config
from optidist_sdk.models import TokenResponse, UserProfile


def _session(tmp_path: Path, role: str | None) -> ApiSession:
    session = ApiSession(load_config(), auth_store=AuthStore(base_dir=tmp_path / (role or "anonymous")))
    if role:
        session.establish(TokenResponse(access="tok"), UserProfile(id=1, username="user", role=role, shop_id=5))
    return session


@pytest.fixture
def anonymous_session(tmp_path: Path) -> ApiSession:
    return _session(tmp_path, None)


@pytest.fixture
def distributor_session(tmp_path: Path) -> ApiSession:
    return _session(tmp_path, "DISTRIBUTOR")


@pytest.fixture
def owner_session(tmp_path: Path) -> ApiSession:
    return _session(tmp_path, "SHOP_OWNER")
