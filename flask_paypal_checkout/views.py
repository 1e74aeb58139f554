"""Blueprint with create-order, capture-order and webhook routes."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import HTTPException

from flask_paypal_checkout.catalog import Catalog, Quote
from flask_paypal_checkout.errors import (
    InvalidOrderIdError,
    MissingOrderIdError,
    PayPalCheckoutError,
)

if TYPE_CHECKING:
    from flask_paypal_checkout import FlaskPayPal

logger = logging.getLogger(__name__)

SERVER_ERROR = {"error": "Server error"}

# PayPal order ids are short upper-case alphanumeric tokens.
ORDER_ID_RE = re.compile(r"[A-Z0-9]{1,36}")


def quote_from_payload(catalog: Catalog, data: Any) -> Quote:
    """Price a ``{productId, qty?, size?}`` body against *catalog*."""
    if not isinstance(data, dict):
        data = {}
    return catalog.quote(
        data.get("productId"),
        size=data.get("size"),
        quantity=data.get("qty"),
    )


def order_id_from_payload(data: Any) -> str:
    """Return the ``orderID`` field.

    Raises:
        MissingOrderIdError: The field is absent or empty.
        InvalidOrderIdError: The value is not a PayPal order id.
    """
    order_id = data.get("orderID") if isinstance(data, dict) else None
    if not order_id or not isinstance(order_id, str):
        raise MissingOrderIdError()
    if not ORDER_ID_RE.fullmatch(order_id):
        raise InvalidOrderIdError()
    return order_id


def event_type_from_payload(data: Any) -> str | None:
    if isinstance(data, dict):
        return data.get("event_type")
    return None


def create_blueprint(ext: "FlaskPayPal") -> Blueprint:
    """Return a Blueprint pre-configured with the extension instance."""

    bp = Blueprint("paypal", __name__)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    @bp.errorhandler(PayPalCheckoutError)
    def handle_checkout_error(exc: PayPalCheckoutError):
        logger.warning("%s %s failed: %s", request.method, request.path, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @bp.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error in %s %s", request.method, request.path)
        return jsonify(SERVER_ERROR), 500

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    @bp.route("/create-order", methods=["POST"])
    def create_order():
        """Create a PayPal order for a catalog product.

        JSON body:

        * ``productId`` – catalog key (required)
        * ``qty`` – positive integer, defaults to ``1``
        * ``size`` – size code, defaults to ``"M"``
        """
        quote = quote_from_payload(ext.catalog, request.get_json(silent=True))
        order_id = ext.client.create_order(quote)
        return jsonify({"orderID": order_id})

    @bp.route("/capture-order", methods=["POST"])
    def capture_order():
        """Capture an approved order and return PayPal's capture object."""
        order_id = order_id_from_payload(request.get_json(silent=True))
        # Fulfillment hooks would go here; nothing is persisted.
        return jsonify(ext.client.capture_order(order_id))

    # ------------------------------------------------------------------
    # Webhook
    # ------------------------------------------------------------------

    @bp.route("/webhook", methods=["POST"])
    def webhook():
        """Log the incoming event type and acknowledge it.

        Signatures are not verified and events are not dispatched.
        """
        data = request.get_json(force=True, silent=True)
        logger.info("Webhook event: %s", event_type_from_payload(data))
        return "ok", 200, {"Content-Type": "text/plain; charset=utf-8"}

    return bp
