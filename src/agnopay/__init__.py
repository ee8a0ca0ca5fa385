"""
Public facade for the AgnoPay SDK.

Integrators can ``from agnopay import ...`` everything they need without
navigating the package. The FastAPI router lives in :mod:`agnopay.routes`
so the core install does not require FastAPI.
"""

from .api import create_client, create_order, load_client_settings
from .core import (
    AgnoPayClient,
    AgnoPayError,
    CheckoutComponent,
    CheckoutError,
    CheckoutMessageHandler,
    CheckoutWidget,
    ConfigError,
    CreateOrderRequest,
    CreateOrderResponse,
    Document,
    IframeStyleConfig,
    LineItem,
    MessageEvent,
    MessageWindow,
    OrderCheckout,
    SDKConfig,
    SDKEnvironment,
    build_checkout_url,
    build_environment,
    configure,
    create_checkout,
    get_config,
    load_env_file,
    origin_matches,
    reset_config,
    use_checkout,
)
from .server import (
    OrderRouteHandler,
    RouteResponse,
    create_order_route_handler,
    init_server_client,
)

__all__ = (
    "AgnoPayClient",
    "AgnoPayError",
    "CheckoutComponent",
    "CheckoutError",
    "CheckoutMessageHandler",
    "CheckoutWidget",
    "ConfigError",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "Document",
    "IframeStyleConfig",
    "LineItem",
    "MessageEvent",
    "MessageWindow",
    "OrderCheckout",
    "OrderRouteHandler",
    "RouteResponse",
    "SDKConfig",
    "SDKEnvironment",
    "build_checkout_url",
    "build_environment",
    "configure",
    "create_checkout",
    "create_client",
    "create_order",
    "create_order_route_handler",
    "get_config",
    "init_server_client",
    "load_client_settings",
    "load_env_file",
    "origin_matches",
    "reset_config",
    "use_checkout",
)
