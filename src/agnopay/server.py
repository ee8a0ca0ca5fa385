"""
Server-side helpers: an order-creation route handler that any web framework
can call, keeping the secret key off the browser.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .core.client import AgnoPayClient
from .core.config import SDKConfig
from .core.types import AgnoPayError

__all__ = [
    "OrderRouteHandler",
    "RouteResponse",
    "create_order_route_handler",
    "init_server_client",
]

_EMPTY_ITEMS_MESSAGE = "line_items is required and cannot be empty"
_INVALID_BODY_MESSAGE = "Request body must be a JSON object"
_GENERIC_FAILURE = "Failed to create order"

RequestBody = Union[Mapping[str, Any], str, bytes, None]


@dataclass(frozen=True)
class RouteResponse:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> str:
        return json.dumps(self.body)


def _error_response(status_code: int, message: str) -> RouteResponse:
    return RouteResponse(status_code, {"error": {"message": message}})


def _decode_body(body: RequestBody) -> Optional[Mapping[str, Any]]:
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        body = json.loads(body)
    return body if isinstance(body, Mapping) else None


class OrderRouteHandler:
    """
    Validates an incoming order body and forwards it to AgnoPay.

    Client errors become 400 responses carrying the AgnoPay error envelope;
    anything unexpected becomes a 500 with a generic message.
    """

    def __init__(self, client: AgnoPayClient) -> None:
        self.client = client

    def __call__(self, body: RequestBody) -> RouteResponse:
        try:
            payload = _decode_body(body)
        except ValueError as exc:
            logging.warning("Rejecting order request with malformed JSON: %s", exc)
            return _error_response(400, _INVALID_BODY_MESSAGE)

        if payload is None:
            return _error_response(400, _INVALID_BODY_MESSAGE)

        line_items = payload.get("line_items")
        if not isinstance(line_items, list) or not line_items:
            return _error_response(400, _EMPTY_ITEMS_MESSAGE)

        try:
            order = self.client.create_order(payload)
        except AgnoPayError as exc:
            logging.error("Order creation error: %s", exc.message)
            return RouteResponse(400, {"error": exc.to_dict()})
        except Exception:  # noqa: BLE001
            logging.exception("Unexpected failure while creating order")
            return _error_response(500, _GENERIC_FAILURE)

        return RouteResponse(200, order.raw)


def init_server_client(
    api_key: str,
    *,
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
) -> AgnoPayClient:
    """Create a client for server-side use with a secret key."""
    return AgnoPayClient(api_key, config=config, session=session)


def create_order_route_handler(
    api_key: str,
    *,
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
) -> OrderRouteHandler:
    return OrderRouteHandler(init_server_client(api_key, config=config, session=session))
