"""Exceptions raised while creating and capturing PayPal orders.

Every error carries the HTTP status the blueprints answer with, so a view
only has to let it propagate::

    try:
        quote = catalog.quote(product_id, size=size, quantity=qty)
    except InvalidProductError as exc:
        return jsonify(exc.to_dict()), exc.status_code
"""

from __future__ import annotations

from typing import Any


class PayPalCheckoutError(Exception):
    """Base class for all flask-paypal-checkout errors."""

    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: str | None = None, *, details: Any = None) -> None:
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body sent back to the storefront."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ---------------------------------------------------------------------------
# Client input errors (HTTP 400)
# ---------------------------------------------------------------------------


class InvalidProductError(PayPalCheckoutError):
    """The requested product id is not in the catalog."""

    status_code = 400
    message = "Invalid product"


class InvalidQuantityError(PayPalCheckoutError):
    """The requested quantity is not a positive integer."""

    status_code = 400
    message = "Invalid quantity"


class MissingOrderIdError(PayPalCheckoutError):
    status_code = 400
    message = "orderID required"


class InvalidOrderIdError(MissingOrderIdError):
    """The order id is not shaped like a PayPal order id."""

    message = "Invalid orderID"


# ---------------------------------------------------------------------------
# Upstream failures (HTTP 500)
# ---------------------------------------------------------------------------


class ProviderError(PayPalCheckoutError):
    """PayPal answered with a non-success status."""

    status_code = 500


class ProviderAuthError(ProviderError):
    """The OAuth2 token request was rejected.

    ``details`` holds the raw response body returned by PayPal.
    """

    message = "PayPal token error"


class ProviderCreateError(ProviderError):
    message = "PayPal create failed"


class ProviderCaptureError(ProviderError):
    message = "Capture failed"
