"""
HTTP client for the AgnoPay orders endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .config import SDKConfig, resolve_config
from .types import (
    INVALID_RESPONSE,
    NETWORK_ERROR,
    AgnoPayError,
    CreateOrderRequest,
    CreateOrderResponse,
)

__all__ = [
    "AgnoPayClient",
    "OrderPayload",
    "create_order",
]

OrderPayload = Union[CreateOrderRequest, Mapping[str, Any]]

_GENERIC_FAILURE = "Failed to create order"
_NETWORK_FAILURE = "Network error while creating order"


def _serialize(request: OrderPayload) -> Dict[str, Any]:
    if isinstance(request, CreateOrderRequest):
        return request.to_dict()
    return dict(request)


def _error_from_response(response: requests.Response) -> AgnoPayError:
    try:
        data = response.json()
    except ValueError:
        data = None

    envelope = data.get("error") if isinstance(data, dict) else None
    if not isinstance(envelope, dict):
        return AgnoPayError(
            _GENERIC_FAILURE,
            details=envelope,
            status_code=response.status_code,
        )
    return AgnoPayError(
        envelope.get("message") or _GENERIC_FAILURE,
        code=envelope.get("code"),
        details=envelope,
        status_code=response.status_code,
    )


def create_order(
    session: requests.Session,
    config: SDKConfig,
    api_key: str,
    body: Dict[str, Any],
    *,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Submit one order and return the decoded JSON body.

    Raises :class:`AgnoPayError` for non-2xx answers, undecodable bodies and
    transport failures. Nothing is retried.
    """
    url = config.orders_url
    logging.info("Creating order at %s", url)
    try:
        response = session.post(
            url,
            json=body,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
        )
    except requests.RequestException as exc:
        logging.error("Order request to %s failed: %s", url, exc)
        raise AgnoPayError(_NETWORK_FAILURE, code=NETWORK_ERROR, details=str(exc)) from exc

    if not response.ok:
        error = _error_from_response(response)
        logging.error(
            "AgnoPay responded with %s: %s", response.status_code, error.message
        )
        raise error

    try:
        return response.json()
    except ValueError as exc:
        raise AgnoPayError(
            f"Failed to parse JSON from {url}",
            code=INVALID_RESPONSE,
            details=response.text,
            status_code=response.status_code,
        ) from exc


class AgnoPayClient:
    """
    Thin wrapper around ``POST /v1/orders``.

    ``config`` pins the API base URL; when omitted the process-wide
    configuration is read on every call so :func:`agnopay.configure` applies
    to clients created before it.
    """

    def __init__(
        self,
        api_key: str,
        *,
        config: Optional[SDKConfig] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key
        self._config = config
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def config(self) -> SDKConfig:
        return resolve_config(self._config)

    def create_order(self, request: OrderPayload) -> CreateOrderResponse:
        payload = create_order(
            self.session,
            self.config,
            self.api_key,
            _serialize(request),
            timeout=self.timeout,
        )
        if not isinstance(payload, dict):
            raise AgnoPayError(
                "Unexpected order payload", code=INVALID_RESPONSE, details=payload
            )
        order = CreateOrderResponse.from_response(payload)
        logging.info("Order %s created with status %s", order.order_id, order.status)
        return order
