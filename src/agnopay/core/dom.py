"""
A minimal page model for rendering embedded checkouts server-side.

Elements are plain :mod:`xml.etree.ElementTree` nodes. :class:`Document`
adds selector lookup and a :class:`MessageWindow` that plays the role of the
browser's ``window`` for cross-frame ``postMessage`` traffic.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

__all__ = [
    "Document",
    "MessageEvent",
    "MessageListener",
    "MessageWindow",
    "style_attribute",
]


@dataclass(frozen=True)
class MessageEvent:
    origin: str
    data: Any


MessageListener = Callable[[MessageEvent], None]


class MessageWindow:
    """Synchronous ``message`` event dispatcher."""

    def __init__(self) -> None:
        self._listeners: List[MessageListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: MessageListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: MessageListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logging.debug("Listener %r was not registered", listener)

    def post_message(self, data: Any, origin: str) -> MessageEvent:
        event = MessageEvent(origin=origin, data=data)
        # Listeners may unregister themselves while handling the event.
        for listener in list(self._listeners):
            listener(event)
        return event


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _css_property(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("-", name).lower()


def style_attribute(styles: Mapping[str, Optional[str]]) -> str:
    """Render ``{"minHeight": "100vh"}`` as ``"min-height: 100vh"``; ``None`` values are dropped."""
    return "; ".join(
        f"{_css_property(name)}: {value}"
        for name, value in styles.items()
        if value is not None
    )


class Document:
    """
    A page that checkout widgets can be mounted into.

    Only the selectors a host page realistically passes are understood:
    ``#id``, ``.class`` and bare tag names.
    """

    def __init__(self, root: Optional[ET.Element] = None) -> None:
        self.root = root if root is not None else ET.Element("body")
        self.window = MessageWindow()

    @classmethod
    def from_html(cls, markup: str) -> "Document":
        return cls(ET.fromstring(markup))

    def query_selector(self, selector: str) -> Optional[ET.Element]:
        selector = selector.strip()
        if not selector:
            return None
        for element in self.root.iter():
            if _matches(element, selector):
                return element
        return None

    def contains(self, element: ET.Element) -> bool:
        return any(node is element for node in self.root.iter())

    def render(self) -> str:
        return ET.tostring(self.root, encoding="unicode", method="html")


def _matches(element: ET.Element, selector: str) -> bool:
    if selector.startswith("#"):
        return element.get("id") == selector[1:]
    if selector.startswith("."):
        return selector[1:] in (element.get("class") or "").split()
    return element.tag == selector
