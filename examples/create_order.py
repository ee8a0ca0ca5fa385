"""
Minimal script that creates an order and writes a checkout page for it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from agnopay import (
    AgnoPayError,
    CheckoutError,
    ConfigError,
    CreateOrderRequest,
    Document,
    IframeStyleConfig,
    LineItem,
    create_checkout,
    create_client,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an AgnoPay order using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AGNOPAY_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--api-key", help="Secret key (default: AGNOPAY_SECRET_KEY)")
    parser.add_argument("--code", default="ITEM-001")
    parser.add_argument("--description", default="Product")
    parser.add_argument(
        "--amount",
        type=int,
        default=9900,
        help="Unit price in minor currency units (default: 9900)",
    )
    parser.add_argument("--quantity", type=int, default=1)
    parser.add_argument("--primary-color", default="#10b981")
    parser.add_argument(
        "--output",
        default="checkout.html",
        help="Where to write the checkout page (default: checkout.html)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_client(args.api_key, env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    request = CreateOrderRequest(
        line_items=(
            LineItem(
                code=args.code,
                description=args.description,
                amount=args.amount,
                quantity=args.quantity,
            ),
        )
    )

    try:
        order = client.create_order(request)
    except AgnoPayError as exc:
        logging.error("Order creation failed: %s", exc.message)
        return 1

    logging.info("Order %s created with status %s", order.order_id, order.status)

    document = Document.from_html('<html><body><div id="checkout"></div></body></html>')

    def on_error(error: CheckoutError) -> None:
        logging.error("Payment failed: %s", error)

    create_checkout(
        document,
        order_id=order.order_id,
        container="#checkout",
        style=IframeStyleConfig(primary_color=args.primary_color),
        on_success=lambda order_id: logging.info("Order %s paid", order_id),
        on_error=on_error,
        config=client.config,
    )
    Path(args.output).write_text(document.render(), encoding="utf-8")
    logging.info("Checkout page written to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
