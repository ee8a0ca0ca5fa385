"""
Stateful order creation for front-end style integrations.

:func:`use_checkout` returns an :class:`OrderCheckout` exposing
``create_order``, ``is_loading``, ``error`` and ``order``. Failures never
escape ``create_order``; they land in ``error`` and the ``on_error`` callback.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

import requests

from .client import AgnoPayClient, OrderPayload
from .config import SDKConfig, resolve_publishable_key
from .environment import build_environment
from .types import MISSING_KEY, AgnoPayError, CreateOrderResponse

__all__ = [
    "MISSING_KEY_MESSAGE",
    "OrderCheckout",
    "use_checkout",
]

MISSING_KEY_MESSAGE = (
    "AgnoPay publishable key is required. Set AGNOPAY_PUBLISHABLE_KEY or pass "
    "publishable_key."
)
UNEXPECTED_FAILURE_MESSAGE = "Failed to create order"


class OrderCheckout:
    def __init__(
        self,
        publishable_key: Optional[str],
        *,
        on_success: Optional[Callable[[CreateOrderResponse], Any]] = None,
        on_error: Optional[Callable[[AgnoPayError], Any]] = None,
        config: Optional[SDKConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.publishable_key = publishable_key
        self.on_success = on_success
        self.on_error = on_error
        self.is_loading = False
        self.error: Optional[AgnoPayError] = None
        self.order: Optional[CreateOrderResponse] = None
        self._client: Optional[AgnoPayClient] = None
        if publishable_key:
            self._client = AgnoPayClient(publishable_key, config=config, session=session)

    def _fail(self, error: AgnoPayError) -> None:
        self.error = error
        if self.on_error is not None:
            self.on_error(error)

    def create_order(self, request: OrderPayload) -> Optional[CreateOrderResponse]:
        """Create an order, returning it or ``None`` when anything went wrong."""
        if self._client is None:
            logging.error("Cannot create order without a publishable key")
            self._fail(AgnoPayError(MISSING_KEY_MESSAGE, code=MISSING_KEY))
            return None

        self.is_loading = True
        self.error = None
        try:
            order = self._client.create_order(request)
            self.order = order
            if self.on_success is not None:
                self.on_success(order)
        except AgnoPayError as exc:
            self._fail(exc)
            return None
        except Exception as exc:  # noqa: BLE001
            logging.exception("Unexpected failure while creating order")
            self._fail(AgnoPayError(UNEXPECTED_FAILURE_MESSAGE, details=str(exc)))
            return None
        finally:
            self.is_loading = False

        return order


def use_checkout(
    publishable_key: Optional[str] = None,
    *,
    on_success: Optional[Callable[[CreateOrderResponse], Any]] = None,
    on_error: Optional[Callable[[AgnoPayError], Any]] = None,
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> OrderCheckout:
    """
    Build an :class:`OrderCheckout`.

    Without ``publishable_key`` the key is looked up now, in ``environ``
    (default :data:`os.environ`) and then ``env_file``.
    """
    environment = build_environment(env_file=env_file, base=environ)
    key = resolve_publishable_key(publishable_key, environment)
    return OrderCheckout(
        key,
        on_success=on_success,
        on_error=on_error,
        config=config,
        session=session,
    )
