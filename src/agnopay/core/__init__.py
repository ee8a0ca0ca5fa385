"""
Core primitives: order client, configuration and checkout embedding.
"""

from .checkout import (
    CheckoutComponent,
    CheckoutMessageHandler,
    CheckoutWidget,
    build_checkout_url,
    create_checkout,
    origin_matches,
)
from .client import AgnoPayClient
from .config import (
    ConfigError,
    SDKConfig,
    configure,
    get_config,
    reset_config,
)
from .dom import Document, MessageEvent, MessageWindow
from .environment import SDKEnvironment, build_environment, load_env_file
from .hooks import OrderCheckout, use_checkout
from .types import (
    AgnoPayError,
    CheckoutError,
    CreateOrderRequest,
    CreateOrderResponse,
    IframeStyleConfig,
    LineItem,
)

__all__ = [
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
    "SDKConfig",
    "SDKEnvironment",
    "build_checkout_url",
    "build_environment",
    "configure",
    "create_checkout",
    "get_config",
    "load_env_file",
    "origin_matches",
    "reset_config",
    "use_checkout",
]
