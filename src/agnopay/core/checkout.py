"""
Embedding of the hosted AgnoPay checkout page.

Two flavours share the same URL building and message protocol:

* :func:`create_checkout` mounts a widget into a :class:`~agnopay.core.dom.Document`
  and hands back a :class:`CheckoutWidget` whose ``destroy()`` tears it down.
* :class:`CheckoutComponent` renders a standalone tree and ties its message
  listener to ``mount()``/``unmount()``.

The hosted page reports the outcome with ``postMessage``::

    {"type": "agnopay:payment:success"}
    {"type": "agnopay:payment:error", "error": "Card declined"}
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import quote, urlencode, urlsplit

from .config import SDKConfig, resolve_config
from .dom import Document, MessageEvent, MessageWindow, style_attribute
from .types import CheckoutError, IframeStyleConfig

__all__ = [
    "CheckoutComponent",
    "CheckoutMessageHandler",
    "CheckoutWidget",
    "DEFAULT_TITLE",
    "IFRAME_ALLOW",
    "PAYMENT_ERROR_MESSAGE",
    "PAYMENT_SUCCESS_MESSAGE",
    "SANDBOX_PERMISSIONS",
    "build_checkout_url",
    "create_checkout",
    "origin_matches",
]

PAYMENT_SUCCESS_MESSAGE = "agnopay:payment:success"
PAYMENT_ERROR_MESSAGE = "agnopay:payment:error"

SANDBOX_PERMISSIONS = (
    "allow-same-origin allow-scripts allow-forms allow-popups "
    "allow-popups-to-escape-sandbox"
)
IFRAME_ALLOW = "payment"
IFRAME_TITLE = "AgnoPay Checkout"

DEFAULT_TITLE = "Complete Your Purchase"
DEFAULT_HEADER_BACKGROUND = "linear-gradient(to right, rgb(37, 99, 235), rgb(147, 51, 234))"
DEFAULT_TEXT_COLOR = "white"
DEFAULT_FONT_FAMILY = "system-ui, -apple-system, sans-serif"
DEFAULT_PAGE_BACKGROUND = "#f9fafb"
DEFAULT_CARD_BACKGROUND = "white"
DEFAULT_CARD_RADIUS = "0.5rem"
DEFAULT_CARD_SHADOW = "0 20px 25px -5px rgba(0,0,0,0.1)"
DEFAULT_PAYMENT_ERROR = "Payment failed"

SuccessCallback = Callable[[str], Any]
ErrorCallback = Callable[[CheckoutError], Any]
StyleInput = Union[IframeStyleConfig, Mapping[str, Any], None]


def _coerce_style(style: StyleInput) -> IframeStyleConfig:
    if style is None:
        return IframeStyleConfig()
    if isinstance(style, IframeStyleConfig):
        return style
    return IframeStyleConfig.from_mapping(style)


def build_checkout_url(
    order_id: str,
    style: StyleInput = None,
    *,
    wallet_url: Optional[str] = None,
) -> str:
    """
    Return ``{wallet_url}/orders/{order_id}`` with the present style fields
    appended as query parameters.
    """
    base = (wallet_url or resolve_config(None).wallet_url).rstrip("/")
    url = f"{base}/orders/{quote(str(order_id), safe='')}"
    params = _coerce_style(style).as_query_params()
    if params:
        url = f"{url}?{urlencode(params)}"
    return url


def _origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def origin_matches(origin: str, wallet_url: str, *, allow_prefix: bool = False) -> bool:
    """
    Decide whether a message ``origin`` belongs to the wallet.

    The default compares origins exactly. ``allow_prefix`` accepts any origin
    starting with ``wallet_url``, which also admits look-alike hosts such as
    ``https://wallet.example.com.attacker.net``.
    """
    if not origin:
        return False
    if allow_prefix:
        return origin.startswith(wallet_url)
    return _origin_of(origin) == _origin_of(wallet_url)


class CheckoutMessageHandler:
    """``message`` listener translating wallet events into callbacks."""

    def __init__(
        self,
        order_id: str,
        wallet_url: str,
        *,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        allow_prefix: bool = False,
    ) -> None:
        self.order_id = order_id
        self.wallet_url = wallet_url
        self.on_success = on_success
        self.on_error = on_error
        self.allow_prefix = allow_prefix

    def __call__(self, event: MessageEvent) -> None:
        if not origin_matches(event.origin, self.wallet_url, allow_prefix=self.allow_prefix):
            logging.debug("Ignoring message from foreign origin %s", event.origin)
            return

        try:
            data = event.data
            message_type = data.get("type") if isinstance(data, Mapping) else None
            if message_type == PAYMENT_SUCCESS_MESSAGE:
                logging.info("Payment succeeded for order %s", self.order_id)
                if self.on_success is not None:
                    self.on_success(self.order_id)
            elif message_type == PAYMENT_ERROR_MESSAGE:
                reason = data.get("error") or DEFAULT_PAYMENT_ERROR
                logging.info("Payment failed for order %s: %s", self.order_id, reason)
                if self.on_error is not None:
                    self.on_error(CheckoutError(str(reason)))
        except Exception:  # noqa: BLE001
            logging.exception("Error handling message from checkout frame")


def _build_iframe(src: str, **attributes: str) -> ET.Element:
    iframe = ET.Element("iframe")
    iframe.set("src", src)
    for name, value in attributes.items():
        iframe.set(name, value)
    iframe.set("title", IFRAME_TITLE)
    iframe.set("sandbox", SANDBOX_PERMISSIONS)
    iframe.set("allow", IFRAME_ALLOW)
    return iframe


def _build_widget_tree(
    iframe_url: str,
    style: IframeStyleConfig,
    *,
    title: Optional[str],
    hide_header: bool,
) -> ET.Element:
    transparent = bool(style.transparent)

    wrapper = ET.Element("div")
    wrapper.set("class", "agnopay-checkout")
    wrapper.set(
        "style",
        style_attribute(
            {
                "minHeight": "100vh",
                "display": "flex",
                "alignItems": "center",
                "justifyContent": "center",
                "padding": "1rem",
                "backgroundColor": "transparent" if transparent else DEFAULT_PAGE_BACKGROUND,
            }
        ),
    )

    card = ET.SubElement(wrapper, "div")
    card.set(
        "style",
        style_attribute(
            {
                "width": "100%",
                "maxWidth": "1024px",
                "borderRadius": style.border_radius or DEFAULT_CARD_RADIUS,
                "backgroundColor": "transparent"
                if transparent
                else style.background_color or DEFAULT_CARD_BACKGROUND,
                "boxShadow": "none" if transparent else DEFAULT_CARD_SHADOW,
                "overflow": "hidden",
            }
        ),
    )

    if not hide_header and title:
        header = ET.SubElement(card, "div")
        header.set(
            "style",
            style_attribute(
                {
                    "padding": "1rem",
                    "background": style.primary_color or DEFAULT_HEADER_BACKGROUND,
                }
            ),
        )
        heading = ET.SubElement(header, "h1")
        heading.text = title
        heading.set(
            "style",
            style_attribute(
                {
                    "fontSize": "1.5rem",
                    "fontWeight": "bold",
                    "textAlign": "center",
                    "color": style.text_color or DEFAULT_TEXT_COLOR,
                    "fontFamily": style.font_family or DEFAULT_FONT_FAMILY,
                    "margin": "0",
                }
            ),
        )

    frame_box = ET.SubElement(card, "div")
    frame_box.set(
        "style",
        style_attribute(
            {
                "position": "relative",
                "width": "100%",
                "height": "100vh" if hide_header else "calc(100vh - 200px)",
                "minHeight": "500px",
            }
        ),
    )
    frame_box.append(
        _build_iframe(
            iframe_url,
            style=style_attribute({"width": "100%", "height": "100%", "border": "0"}),
        )
    )
    return wrapper


class CheckoutWidget:
    """Handle returned by :func:`create_checkout`."""

    def __init__(
        self,
        *,
        window: MessageWindow,
        container: ET.Element,
        element: ET.Element,
        handler: CheckoutMessageHandler,
        iframe_url: str,
    ) -> None:
        self._window = window
        self._container = container
        self.element = element
        self.handler = handler
        self.iframe_url = iframe_url
        self._active = True

    @property
    def is_active(self) -> bool:
        return self._active

    def destroy(self) -> None:
        """Stop listening for wallet messages and detach the widget."""
        if not self._active:
            return
        self._window.remove_listener(self.handler)
        if self.element in list(self._container):
            self._container.remove(self.element)
        self._active = False
        logging.debug("Checkout widget for order %s destroyed", self.handler.order_id)


def create_checkout(
    document: Document,
    *,
    order_id: str,
    container: Union[str, ET.Element],
    title: Optional[str] = DEFAULT_TITLE,
    hide_header: bool = False,
    style: StyleInput = None,
    on_success: Optional[SuccessCallback] = None,
    on_error: Optional[ErrorCallback] = None,
    config: Optional[SDKConfig] = None,
    allow_prefix_origin: bool = False,
) -> CheckoutWidget:
    """
    Mount a checkout iframe for ``order_id`` into ``container``.

    ``container`` is either a selector resolved against ``document`` or an
    element. Raises :class:`ValueError` when the selector matches nothing;
    every later failure is reported through ``on_error``.
    """
    if isinstance(container, str):
        container_el = document.query_selector(container)
        if container_el is None:
            raise ValueError(f"Container element not found: {container}")
    else:
        container_el = container

    wallet_url = resolve_config(config).wallet_url
    style_config = _coerce_style(style)
    iframe_url = build_checkout_url(order_id, style_config, wallet_url=wallet_url)
    element = _build_widget_tree(
        iframe_url, style_config, title=title, hide_header=hide_header
    )

    handler = CheckoutMessageHandler(
        order_id,
        wallet_url,
        on_success=on_success,
        on_error=on_error,
        allow_prefix=allow_prefix_origin,
    )
    document.window.add_listener(handler)
    container_el.append(element)
    logging.info("Checkout widget mounted for order %s", order_id)

    return CheckoutWidget(
        window=document.window,
        container=container_el,
        element=element,
        handler=handler,
        iframe_url=iframe_url,
    )


class CheckoutComponent:
    """
    Lifecycle-bound checkout: render it, then ``mount`` while it is on screen.

    Example::

        component = CheckoutComponent(order.order_id, on_success=redirect)
        html = component.render_html()
        component.mount(document.window)
        ...
        component.unmount()
    """

    def __init__(
        self,
        order_id: str,
        *,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        class_name: Optional[str] = None,
        title: Optional[str] = DEFAULT_TITLE,
        style: StyleInput = None,
        hide_header: bool = False,
        config: Optional[SDKConfig] = None,
        allow_prefix_origin: bool = False,
    ) -> None:
        self.order_id = order_id
        self.class_name = class_name
        self.title = title
        self.style = _coerce_style(style)
        self.hide_header = hide_header
        self.wallet_url = resolve_config(config).wallet_url
        self.iframe_url = build_checkout_url(
            order_id, self.style, wallet_url=self.wallet_url
        )
        self.handler = CheckoutMessageHandler(
            order_id,
            self.wallet_url,
            on_success=on_success,
            on_error=on_error,
            allow_prefix=allow_prefix_origin,
        )
        self._window: Optional[MessageWindow] = None

    @property
    def is_mounted(self) -> bool:
        return self._window is not None

    @property
    def container_class(self) -> str:
        if self.class_name:
            return self.class_name
        return "bg-transparent" if self.style.transparent else "bg-gray-50"

    def render(self) -> ET.Element:
        root = ET.Element("div")
        root.set("class", self.container_class)

        if not self.hide_header and self.title:
            header = ET.SubElement(root, "div")
            header.set("class", "p-4")
            header.set(
                "style",
                style_attribute(
                    {"background": self.style.primary_color or DEFAULT_HEADER_BACKGROUND}
                ),
            )
            heading = ET.SubElement(header, "h1")
            heading.set("class", "text-2xl font-bold text-center")
            heading.set(
                "style",
                style_attribute(
                    {
                        "color": self.style.text_color or DEFAULT_TEXT_COLOR,
                        "fontFamily": self.style.font_family,
                    }
                ),
            )
            heading.text = self.title

        frame_box = ET.SubElement(root, "div")
        frame_box.set("class", "relative w-full")
        frame_box.set(
            "style",
            style_attribute(
                {"height": "100vh" if self.hide_header else "calc(100vh - 80px)"}
            ),
        )
        frame_box.append(_build_iframe(self.iframe_url, **{"class": "w-full h-full border-0"}))
        return root

    def render_html(self) -> str:
        return ET.tostring(self.render(), encoding="unicode", method="html")

    def mount(self, window: MessageWindow) -> None:
        if self._window is window:
            return
        if self._window is not None:
            self.unmount()
        window.add_listener(self.handler)
        self._window = window

    def unmount(self) -> None:
        if self._window is None:
            return
        self._window.remove_listener(self.handler)
        self._window = None
