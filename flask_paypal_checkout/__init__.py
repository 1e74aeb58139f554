"""flask_paypal_checkout – Flask/Quart extension for PayPal order checkout."""

from __future__ import annotations

import logging

from flask_paypal_checkout.catalog import Catalog
from flask_paypal_checkout.client import AsyncPayPalClient, PayPalClient
from flask_paypal_checkout.config import DEFAULT_BRAND_NAME, SANDBOX, PayPalConfig
from flask_paypal_checkout.errors import (
    InvalidOrderIdError,
    InvalidProductError,
    InvalidQuantityError,
    MissingOrderIdError,
    PayPalCheckoutError,
    ProviderAuthError,
    ProviderCaptureError,
    ProviderCreateError,
    ProviderError,
)
from flask_paypal_checkout.version import __version__
from flask_paypal_checkout.views import create_blueprint

__all__ = [
    "Catalog",
    "FlaskPayPal",
    "InvalidOrderIdError",
    "InvalidProductError",
    "InvalidQuantityError",
    "MissingOrderIdError",
    "PayPalCheckoutError",
    "PayPalConfig",
    "ProviderAuthError",
    "ProviderCaptureError",
    "ProviderCreateError",
    "ProviderError",
    "__version__",
]

logger = logging.getLogger(__name__)


def _is_quart_app(app) -> bool:
    """Return ``True`` when *app* is a :class:`quart.Quart` instance."""
    try:
        from quart import Quart

        return isinstance(app, Quart)
    except ImportError:
        return False


class FlaskPayPal:
    """Flask/Quart extension that proxies storefront checkouts to PayPal.

    Usage – application factory pattern::

        from flask import Flask
        from flask_paypal_checkout import FlaskPayPal, PayPalConfig

        paypal = FlaskPayPal()

        def create_app():
            app = Flask(__name__)
            paypal.init_app(app, config=PayPalConfig.from_env())
            return app

    Usage – direct initialisation from ``app.config``::

        app = Flask(__name__)
        app.config["PAYPAL_CLIENT_ID"] = "..."
        app.config["PAYPAL_CLIENT_SECRET"] = "..."
        ext = FlaskPayPal(app)

    Usage – with Quart (async)::

        from quart import Quart

        app = Quart(__name__)
        ext = FlaskPayPal(app)   # async blueprint selected automatically

    Configuration keys (set on ``app.config``, ignored when ``config=`` is
    passed):

    ``PAYPAL_CLIENT_ID`` / ``PAYPAL_CLIENT_SECRET``
        REST app credentials (default: empty).
    ``PAYPAL_ENV``
        ``"production"`` or ``"sandbox"`` (default).
    ``PAYPAL_BRAND_NAME``
        Brand shown on the PayPal checkout page.
    ``PAYPAL_URL_PREFIX``
        URL prefix for the blueprint (default: ``"/api/paypal"``).

    Routes::

        POST /api/paypal/create-order   {"productId": ..., "qty": 1, "size": "M"}
        POST /api/paypal/capture-order  {"orderID": ...}
        POST /api/paypal/webhook        any body, always answers "ok"
    """

    def __init__(self, app=None, *, config=None, catalog=None, transport=None) -> None:
        self._config: PayPalConfig | None = config
        self._catalog: Catalog | None = catalog
        # Optional httpx transport, mainly for tests.
        self._transport = transport
        self._client: PayPalClient | AsyncPayPalClient | None = None

        if app is not None:
            self.init_app(app)

    # ------------------------------------------------------------------
    # Initialisation
    # ------------------------------------------------------------------

    def init_app(self, app, *, config=None, catalog=None, transport=None) -> None:
        """Initialise the extension against *app* (Flask or Quart).

        Keyword arguments override the ones given to the constructor.
        """
        if config is not None:
            self._config = config
        if catalog is not None:
            self._catalog = catalog
        if transport is not None:
            self._transport = transport

        app.config.setdefault("PAYPAL_CLIENT_ID", "")
        app.config.setdefault("PAYPAL_CLIENT_SECRET", "")
        app.config.setdefault("PAYPAL_ENV", SANDBOX)
        app.config.setdefault("PAYPAL_BRAND_NAME", DEFAULT_BRAND_NAME)
        app.config.setdefault("PAYPAL_URL_PREFIX", "/api/paypal")

        if self._config is None:
            self._config = PayPalConfig.from_mapping(app.config)
        if self._catalog is None:
            self._catalog = Catalog()

        if not self._config.has_credentials:
            logger.warning(
                "PayPal client id/secret are not configured; token requests will fail."
            )

        if _is_quart_app(app):
            from flask_paypal_checkout.quart_views import create_async_blueprint

            self._client = AsyncPayPalClient(self._config, transport=self._transport)
            blueprint = create_async_blueprint(self)
        else:
            self._client = PayPalClient(self._config, transport=self._transport)
            blueprint = create_blueprint(self)

        url_prefix = app.config["PAYPAL_URL_PREFIX"]
        app.register_blueprint(blueprint, url_prefix=url_prefix)

        app.extensions["paypal"] = self

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def client(self) -> PayPalClient | AsyncPayPalClient:
        """The PayPal client used by the registered blueprint."""
        if self._client is None:
            raise RuntimeError(
                "FlaskPayPal extension not initialised. Call init_app(app) first."
            )
        return self._client

    @property
    def config(self) -> PayPalConfig:
        if self._config is None:
            raise RuntimeError(
                "FlaskPayPal extension not initialised. Call init_app(app) first."
            )
        return self._config

    @property
    def catalog(self) -> Catalog:
        if self._catalog is None:
            raise RuntimeError(
                "FlaskPayPal extension not initialised. Call init_app(app) first."
            )
        return self._catalog
