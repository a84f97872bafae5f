from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = BASE_DIR / "src"

sys.path.insert(0, str(SRC_DIR))

from optidist_sdk.models_catalog import Frame  # noqa: E402

BASE_URL = "https://api.example.com/api"


@pytest.fixture(autouse=True)
def _set_api_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "OPTIDIST_ENV",
        "OPTIDIST_API_BASE_URL_DEV",
        "OPTIDIST_TIMEOUT_SECONDS",
        "OPTIDIST_CONNECT_TIMEOUT_SECONDS",
        "OPTIDIST_READ_TIMEOUT_SECONDS",
        "OPTIDIST_MAX_CONNECTIONS",
        "OPTIDIST_VERIFY_SSL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OPTIDIST_API_BASE_URL", BASE_URL)


@pytest.fixture
def catalog() -> list[Frame]:
    return [
        Frame(id=1, product_id="F001", name="Aviator Classic", price=Decimal("45.00"), brand="RayBan", frame_type="full_rim"),
        Frame(id=2, product_id="F002", name="Round Metal", price=Decimal("38.50"), brand="RayBan", frame_type="full_rim"),
        Frame(id=3, product_id="F003", name="Cat Eye", price=Decimal("52.00"), brand="Vogue", frame_type="half_rim"),
        Frame(id=4, product_id="G100", name="Sport Wrap", price=Decimal("60.00"), brand="Oakley", frame_type="rimless"),
    ]
