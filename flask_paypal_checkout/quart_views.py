"""Async blueprint for Quart applications.

This module mirrors :mod:`flask_paypal_checkout.views` but uses ``async def``
view functions, awaits Quart's coroutine-based request helpers and calls
PayPal through :class:`~flask_paypal_checkout.client.AsyncPayPalClient`.

It is selected automatically by :meth:`~flask_paypal_checkout.FlaskPayPal.init_app`
when the application is a :class:`quart.Quart` instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from werkzeug.exceptions import HTTPException

from flask_paypal_checkout.errors import PayPalCheckoutError
from flask_paypal_checkout.views import (
    SERVER_ERROR,
    event_type_from_payload,
    order_id_from_payload,
    quote_from_payload,
)

if TYPE_CHECKING:
    from flask_paypal_checkout import FlaskPayPal

logger = logging.getLogger(__name__)


def create_async_blueprint(ext: "FlaskPayPal"):
    """Return a Quart Blueprint pre-configured with the extension instance."""
    try:
        from quart import Blueprint, jsonify, request
    except ImportError as exc:  # pragma: no cover
        raise ImportError(
            "quart is required for flask_paypal_checkout.quart_views. "
            "Install it with: pip install 'flask-paypal-checkout[quart]'"
        ) from exc

    bp = Blueprint("paypal", __name__)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    @bp.errorhandler(PayPalCheckoutError)
    async def handle_checkout_error(exc: PayPalCheckoutError):
        logger.warning("%s %s failed: %s", request.method, request.path, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @bp.errorhandler(Exception)
    async def handle_unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error in %s %s", request.method, request.path)
        return jsonify(SERVER_ERROR), 500

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    @bp.route("/create-order", methods=["POST"])
    async def create_order():
        """Create a PayPal order for a catalog product."""
        quote = quote_from_payload(ext.catalog, await request.get_json(silent=True))
        order_id = await ext.client.create_order(quote)
        return jsonify({"orderID": order_id})

    @bp.route("/capture-order", methods=["POST"])
    async def capture_order():
        """Capture an approved order and return PayPal's capture object."""
        order_id = order_id_from_payload(await request.get_json(silent=True))
        return jsonify(await ext.client.capture_order(order_id))

    # ------------------------------------------------------------------
    # Webhook
    # ------------------------------------------------------------------

    @bp.route("/webhook", methods=["POST"])
    async def webhook():
        """Log the incoming event type and acknowledge it."""
        data = await request.get_json(force=True, silent=True)
        logger.info("Webhook event: %s", event_type_from_payload(data))
        return "ok", 200, {"Content-Type": "text/plain; charset=utf-8"}

    return bp
