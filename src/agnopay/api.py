"""
Public, high-level helpers for talking to AgnoPay.
"""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

import requests

from .core.client import AgnoPayClient, OrderPayload
from .core.config import (
    API_URL_ENV,
    PUBLISHABLE_KEY_ENV,
    SECRET_KEY_ENV,
    WALLET_URL_ENV,
    ConfigError,
    SDKConfig,
)
from .core.environment import build_environment
from .core.types import CreateOrderResponse

__all__ = [
    "create_client",
    "create_order",
    "load_client_settings",
]


def load_client_settings(
    *,
    api_key: Optional[str] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> Tuple[str, Optional[SDKConfig]]:
    """
    Resolve the API key and :class:`SDKConfig` from the environment.

    The config is ``None`` when no ``AGNOPAY_*_URL`` variable is set, leaving
    the process-wide configuration in charge. An explicit ``api_key`` wins; otherwise ``AGNOPAY_SECRET_KEY`` and then
    ``AGNOPAY_PUBLISHABLE_KEY`` are consulted.
    """
    environment = build_environment(env_file=env_file, base=base, overrides=overrides)
    key = api_key or environment.first(SECRET_KEY_ENV, PUBLISHABLE_KEY_ENV)
    if not key:
        raise ConfigError(
            f"An API key is required: pass api_key or set {SECRET_KEY_ENV}"
        )
    if environment.first(API_URL_ENV, WALLET_URL_ENV) is None:
        return key, None
    return key, SDKConfig.from_mapping(environment.variables)


def create_client(
    api_key: Optional[str] = None,
    *,
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> AgnoPayClient:
    """
    Construct an :class:`AgnoPayClient`.

    Callers either hand over ``api_key`` and ``config`` directly or let the
    helper read ``AGNOPAY_*`` settings from the environment.
    """
    if config is not None and api_key is not None:
        return AgnoPayClient(api_key, config=config, session=session, timeout=timeout)

    if config is not None and (overrides or base):
        raise ValueError(
            "Provide either a pre-built SDKConfig or environment overrides, not both."
        )

    key, env_config = load_client_settings(
        api_key=api_key, env_file=env_file, overrides=overrides, base=base
    )
    return AgnoPayClient(
        key, config=config or env_config, session=session, timeout=timeout
    )


def create_order(
    request: OrderPayload,
    *,
    api_key: Optional[str] = None,
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> CreateOrderResponse:
    """One-shot helper: build a client and create a single order."""
    client = create_client(
        api_key,
        config=config,
        session=session,
        timeout=timeout,
        env_file=env_file,
        overrides=overrides,
        base=base,
    )
    return client.create_order(request)
