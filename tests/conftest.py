"""Shared fixtures for the agnopay test suite."""

from __future__ import annotations

from typing import Any, Dict

import pytest
import requests

from agnopay import AgnoPayClient, SDKConfig, reset_config


# ---------------------------------------------------------------------------
# Constants reused across tests
# ---------------------------------------------------------------------------

TEST_API_URL = "https://api.agnopay.test"
TEST_WALLET_URL = "https://wallet.agnopay.test"
TEST_API_KEY = "ak_test_123456"
ORDERS_URL = f"{TEST_API_URL}/v1/orders"

_AGNOPAY_ENV = (
    "AGNOPAY_API_URL",
    "AGNOPAY_WALLET_URL",
    "AGNOPAY_PUBLISHABLE_KEY",
    "AGNOPAY_SECRET_KEY",
    "NEXT_PUBLIC_AGNOPAY_KEY",
)


@pytest.fixture(autouse=True)
def _isolate_sdk_state(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep the process-wide config and AGNOPAY_* variables out of each test."""
    for key in _AGNOPAY_ENV:
        monkeypatch.delenv(key, raising=False)
    # A stray .env in the working directory must not leak into tests.
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture()
def sdk_config() -> SDKConfig:
    return SDKConfig(api_url=TEST_API_URL, wallet_url=TEST_WALLET_URL)


@pytest.fixture()
def client(sdk_config: SDKConfig) -> AgnoPayClient:
    return AgnoPayClient(TEST_API_KEY, config=sdk_config, session=requests.Session())


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@pytest.fixture()
def order_request() -> Dict[str, Any]:
    return {
        "line_items": [
            {"code": "A", "description": "d", "amount": 100, "quantity": 1},
        ]
    }


@pytest.fixture()
def pending_order() -> Dict[str, Any]:
    return {
        "uuid": "o1",
        "status": "pending",
        "pix": {"qr_code": "00020126580014br.gov.bcb.pix", "expires_at": "2026-10-20T00:00:00Z"},
    }
