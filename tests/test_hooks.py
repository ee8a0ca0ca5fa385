"""Tests for agnopay.core.hooks.use_checkout."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

import pytest
import responses
from requests.exceptions import ConnectionError

from agnopay import AgnoPayError, CreateOrderResponse, SDKConfig, use_checkout

from .conftest import ORDERS_URL, TEST_API_KEY


class TestMissingKey:
    @responses.activate
    def test_missing_key_reports_error_without_request(
        self, order_request: Dict[str, Any], sdk_config: SDKConfig
    ) -> None:
        errors: List[AgnoPayError] = []
        checkout = use_checkout(on_error=errors.append, config=sdk_config, environ={})

        result = checkout.create_order(order_request)

        assert result is None
        assert checkout.error is not None
        assert checkout.error.code == "MISSING_KEY"
        assert errors == [checkout.error]
        assert checkout.is_loading is False
        assert checkout.order is None
        assert len(responses.calls) == 0

    def test_key_read_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, sdk_config: SDKConfig
    ) -> None:
        monkeypatch.setenv("AGNOPAY_PUBLISHABLE_KEY", "ak_from_env")
        assert use_checkout(config=sdk_config).publishable_key == "ak_from_env"

    def test_legacy_variable_name(self, sdk_config: SDKConfig) -> None:
        checkout = use_checkout(
            config=sdk_config, environ={"NEXT_PUBLIC_AGNOPAY_KEY": "ak_next"}
        )
        assert checkout.publishable_key == "ak_next"

    def test_key_read_from_env_file(self, tmp_path, sdk_config: SDKConfig) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text('AGNOPAY_PUBLISHABLE_KEY="ak_file"\n', encoding="utf-8")
        checkout = use_checkout(config=sdk_config, environ={}, env_file=str(env_file))
        assert checkout.publishable_key == "ak_file"

    def test_explicit_key_wins(self, sdk_config: SDKConfig) -> None:
        checkout = use_checkout(
            "ak_explicit", config=sdk_config, environ={"AGNOPAY_PUBLISHABLE_KEY": "ak_env"}
        )
        assert checkout.publishable_key == "ak_explicit"


class TestCreateOrder:
    @responses.activate
    def test_success_updates_state(
        self,
        order_request: Dict[str, Any],
        pending_order: Dict[str, Any],
        sdk_config: SDKConfig,
    ) -> None:
        responses.add(responses.POST, ORDERS_URL, json=pending_order, status=201)
        created: List[CreateOrderResponse] = []
        checkout = use_checkout(TEST_API_KEY, on_success=created.append, config=sdk_config)

        order = checkout.create_order(order_request)

        assert order is not None
        assert order.uuid == "o1"
        assert checkout.order is order
        assert checkout.error is None
        assert checkout.is_loading is False
        assert created == [order]
        assert responses.calls[0].request.headers["Authorization"] == f"Bearer {TEST_API_KEY}"

    @responses.activate
    def test_http_error_becomes_state(
        self, order_request: Dict[str, Any], sdk_config: SDKConfig
    ) -> None:
        responses.add(
            responses.POST,
            ORDERS_URL,
            json={"error": {"message": "bad item", "code": "E1"}},
            status=400,
        )
        errors: List[AgnoPayError] = []
        checkout = use_checkout(TEST_API_KEY, on_error=errors.append, config=sdk_config)

        assert checkout.create_order(order_request) is None
        assert checkout.error.message == "bad item"
        assert checkout.error.code == "E1"
        assert errors == [checkout.error]
        assert checkout.is_loading is False

    @responses.activate
    def test_network_error_becomes_state(
        self, order_request: Dict[str, Any], sdk_config: SDKConfig
    ) -> None:
        responses.add(responses.POST, ORDERS_URL, body=ConnectionError("down"))
        checkout = use_checkout(TEST_API_KEY, config=sdk_config)

        assert checkout.create_order(order_request) is None
        assert checkout.error.message == "Network error while creating order"

    @responses.activate
    def test_success_clears_previous_error(
        self,
        order_request: Dict[str, Any],
        pending_order: Dict[str, Any],
        sdk_config: SDKConfig,
    ) -> None:
        responses.add(responses.POST, ORDERS_URL, json={"error": {"message": "x"}}, status=400)
        responses.add(responses.POST, ORDERS_URL, json=pending_order, status=200)
        checkout = use_checkout(TEST_API_KEY, config=sdk_config)

        checkout.create_order(order_request)
        assert checkout.error is not None

        checkout.create_order(order_request)
        assert checkout.error is None
        assert checkout.order.uuid == "o1"

    @responses.activate
    def test_loading_flag_set_during_request(
        self, order_request: Dict[str, Any], sdk_config: SDKConfig
    ) -> None:
        seen: List[bool] = []
        checkout = use_checkout(TEST_API_KEY, config=sdk_config)

        def callback(request):
            seen.append(checkout.is_loading)
            return 200, {}, '{"id": "o9", "status": "pending"}'

        responses.add_callback(responses.POST, ORDERS_URL, callback=callback)

        checkout.create_order(order_request)

        assert seen == [True]
        assert checkout.is_loading is False


class TestCreateOrderBoundary:
    @responses.activate
    def test_unserializable_payload_becomes_state(self, sdk_config: SDKConfig) -> None:
        errors: List[AgnoPayError] = []
        checkout = use_checkout(TEST_API_KEY, on_error=errors.append, config=sdk_config)
        request = {
            "line_items": [
                {"code": "A", "description": "d", "amount": Decimal("1.00"), "quantity": 1}
            ]
        }

        assert checkout.create_order(request) is None
        assert checkout.error is not None
        assert errors == [checkout.error]
        assert checkout.is_loading is False
        assert len(responses.calls) == 0

    @responses.activate
    def test_raising_success_callback_becomes_state(
        self,
        order_request: Dict[str, Any],
        pending_order: Dict[str, Any],
        sdk_config: SDKConfig,
    ) -> None:
        responses.add(responses.POST, ORDERS_URL, json=pending_order)
        errors: List[AgnoPayError] = []

        def explode(order: CreateOrderResponse) -> None:
            raise RuntimeError("callback failed")

        checkout = use_checkout(
            TEST_API_KEY, on_success=explode, on_error=errors.append, config=sdk_config
        )

        assert checkout.create_order(order_request) is None
        assert checkout.error.message == "Failed to create order"
        assert checkout.error.details == "callback failed"
        assert errors == [checkout.error]
        assert checkout.is_loading is False
