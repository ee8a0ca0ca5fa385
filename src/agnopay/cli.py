"""
Command-line interface for creating orders and previewing checkout embeds.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Optional, Sequence, Tuple

from .api import create_client
from .core.checkout import DEFAULT_TITLE, CheckoutComponent, build_checkout_url
from .core.config import ConfigError, SDKConfig
from .core.types import AgnoPayError, CreateOrderRequest, IframeStyleConfig, LineItem


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _line_item(value: str) -> LineItem:
    parts = value.split(":")
    if len(parts) not in (3, 4):
        raise argparse.ArgumentTypeError(
            "Items must look like CODE:DESCRIPTION:AMOUNT[:QUANTITY]"
        )
    code, description, amount = parts[0], parts[1], parts[2]
    quantity = parts[3] if len(parts) == 4 else "1"
    try:
        return LineItem(
            code=code,
            description=description,
            amount=int(amount),
            quantity=int(quantity),
        )
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Amount and quantity must be integers: {value}"
        ) from exc


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _add_style_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("order_id", help="Order identifier returned by create-order")
    parser.add_argument(
        "--transparent",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Ask for a transparent checkout background (--no-transparent sends false)",
    )
    parser.add_argument("--primary-color")
    parser.add_argument("--background-color")
    parser.add_argument("--text-color")
    parser.add_argument("--border-radius")
    parser.add_argument("--font-family")
    parser.add_argument(
        "--wallet-url",
        help="Override the hosted checkout base URL (AGNOPAY_WALLET_URL)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agnopay",
        description="Create AgnoPay orders and build checkout embeds",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AGNOPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    order = commands.add_parser("create-order", help="Create an order and print it as JSON")
    order.add_argument(
        "--item",
        action="append",
        type=_line_item,
        required=True,
        metavar="CODE:DESCRIPTION:AMOUNT[:QUANTITY]",
        help="Line item; amount is in minor currency units. Repeat for more items.",
    )
    order.add_argument("--api-key", help="API key (default: AGNOPAY_SECRET_KEY)")

    url = commands.add_parser("checkout-url", help="Print the hosted checkout iframe URL")
    _add_style_arguments(url)

    html = commands.add_parser("checkout-html", help="Print embeddable checkout markup")
    _add_style_arguments(html)
    html.add_argument("--title", default=None)
    html.add_argument("--hide-header", action="store_true")
    return parser


def _style_from_args(args: argparse.Namespace) -> IframeStyleConfig:
    return IframeStyleConfig(
        transparent=args.transparent,
        primary_color=args.primary_color,
        background_color=args.background_color,
        text_color=args.text_color,
        border_radius=args.border_radius,
        font_family=args.font_family,
    )


def _sdk_config(args: argparse.Namespace, overrides: dict[str, str]) -> SDKConfig:
    config = SDKConfig.from_env(env_file=args.env_file, overrides=overrides)
    return config.with_overrides(wallet_url=getattr(args, "wallet_url", None))


def _run_create_order(args: argparse.Namespace, overrides: dict[str, str]) -> int:
    try:
        client = create_client(
            args.api_key, env_file=args.env_file, overrides=overrides
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    try:
        order = client.create_order(CreateOrderRequest(line_items=tuple(args.item)))
    except AgnoPayError as exc:
        logging.error("Order creation failed: %s (code=%s)", exc.message, exc.code)
        return 1

    print(json.dumps(order.raw, indent=2, sort_keys=True))
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    if args.command == "create-order":
        return _run_create_order(args, overrides)

    try:
        config = _sdk_config(args, overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    style = _style_from_args(args)
    if args.command == "checkout-url":
        print(build_checkout_url(args.order_id, style, wallet_url=config.wallet_url))
        return 0

    component = CheckoutComponent(
        args.order_id,
        title=args.title or DEFAULT_TITLE,
        hide_header=args.hide_header,
        style=style,
        config=config,
    )
    print(component.render_html())
    return 0


def main() -> None:
    sys.exit(run_cli())
