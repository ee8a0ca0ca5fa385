"""
Request, response and error shapes exchanged with the AgnoPay API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

__all__ = [
    "AgnoPayError",
    "CheckoutError",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "IframeStyleConfig",
    "LineItem",
    "INVALID_RESPONSE",
    "MISSING_KEY",
    "NETWORK_ERROR",
]

MISSING_KEY = "MISSING_KEY"
NETWORK_ERROR = "NETWORK_ERROR"
INVALID_RESPONSE = "INVALID_RESPONSE"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class LineItem:
    """
    One priced unit of an order. ``amount`` is expressed in minor currency
    units (cents), so ``9900`` means 99.00.
    """

    code: str
    description: str
    amount: int
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "description": self.description,
            "amount": self.amount,
            "quantity": self.quantity,
        }

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "LineItem":
        return cls(
            code=values["code"],
            description=values["description"],
            amount=int(values["amount"]),
            quantity=int(values.get("quantity", 1)),
        )


@dataclass(frozen=True)
class CreateOrderRequest:
    line_items: Sequence[LineItem] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {"line_items": [item.to_dict() for item in self.line_items]}

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "CreateOrderRequest":
        items = values.get("line_items") or ()
        return cls(line_items=tuple(LineItem.from_mapping(item) for item in items))


@dataclass(frozen=True)
class CreateOrderResponse:
    """
    Order returned by ``POST /v1/orders``.

    Only a handful of fields are surfaced as attributes; everything the API
    sends back is preserved untouched in ``raw``.
    """

    id: Optional[str]
    uuid: Optional[str]
    status: Optional[str]
    pix: Optional[Dict[str, Any]]
    boleto: Optional[Dict[str, Any]]
    raw: Dict[str, Any]

    @property
    def order_id(self) -> Optional[str]:
        return self.id or self.uuid

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "CreateOrderResponse":
        return cls(
            id=payload.get("id"),
            uuid=payload.get("uuid"),
            status=payload.get("status"),
            pix=payload.get("pix"),
            boleto=payload.get("boleto"),
            raw=payload,
        )


class AgnoPayError(Exception):
    """Raised when an order could not be created."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Any = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        envelope: Dict[str, Any] = {"message": self.message}
        if self.code is not None:
            envelope["code"] = self.code
        if self.details is not None:
            envelope["details"] = self.details
        return envelope

    def __repr__(self) -> str:
        return f"AgnoPayError(message={self.message!r}, code={self.code!r})"


class CheckoutError(Exception):
    """Reported to ``on_error`` when the hosted checkout signals a failed payment."""


# Query parameter name for each style field, in serialization order.
_STYLE_PARAMETERS = (
    ("transparent", "transparent"),
    ("primary_color", "primaryColor"),
    ("background_color", "backgroundColor"),
    ("text_color", "textColor"),
    ("border_radius", "borderRadius"),
    ("font_family", "fontFamily"),
)


@dataclass(frozen=True)
class IframeStyleConfig:
    """
    Cosmetic options forwarded to the hosted checkout page.

    Every field is optional. Unset fields are left out of the iframe URL and
    the embedding falls back to its built-in look.
    """

    transparent: Optional[bool] = None
    primary_color: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    border_radius: Optional[str] = None
    font_family: Optional[str] = None

    def as_query_params(self) -> List[tuple]:
        params: List[tuple] = []
        for field_name, param in _STYLE_PARAMETERS:
            value = getattr(self, field_name)
            if value is None or value == "":
                continue
            params.append((param, _stringify(value)))
        return params

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "IframeStyleConfig":
        """Accept either snake_case field names or the camelCase wire names."""
        kwargs: Dict[str, Any] = {}
        for field_name, param in _STYLE_PARAMETERS:
            if field_name in values:
                kwargs[field_name] = values[field_name]
            elif param in values:
                kwargs[field_name] = values[param]
        if "transparent" in kwargs:
            kwargs["transparent"] = _to_flag(kwargs["transparent"])
        return cls(**kwargs)


def _to_flag(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    raise ValueError(f"transparent must be a boolean, got {value!r}")
