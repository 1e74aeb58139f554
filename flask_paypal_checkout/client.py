"""HTTP clients for the PayPal Orders v2 REST API.

:class:`PayPalClient` is used by the Flask blueprint and blocks on each call;
:class:`AsyncPayPalClient` is used by the Quart blueprint. Both fetch a fresh
OAuth2 token for every operation; tokens are never cached.

Tests (and anyone wanting to point at a fake PayPal) can pass an
``httpx`` transport::

    transport = httpx.MockTransport(handler)
    client = PayPalClient(config, transport=transport)
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from flask_paypal_checkout.catalog import Quote
from flask_paypal_checkout.config import PayPalConfig
from flask_paypal_checkout.errors import (
    ProviderAuthError,
    ProviderCaptureError,
    ProviderCreateError,
)

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/oauth2/token"
ORDERS_PATH = "/v2/checkout/orders"


def build_order_payload(quote: Quote, *, brand_name: str) -> dict[str, Any]:
    """Return the JSON body of an Orders v2 create request for *quote*."""
    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "amount": {
                    "currency_code": quote.currency,
                    "value": quote.value,
                },
                "description": quote.description,
            }
        ],
        "application_context": {
            "brand_name": brand_name,
            "landing_page": "NO_PREFERENCE",
            "user_action": "PAY_NOW",
        },
    }


def capture_path(order_id: str) -> str:
    return f"{ORDERS_PATH}/{quote(order_id, safe='')}/capture"


def _body(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _access_token(response: httpx.Response) -> str:
    if not response.is_success:
        logger.error("PayPal token error: %s", response.text)
        raise ProviderAuthError(details=response.text)
    return response.json()["access_token"]


def _order_id(response: httpx.Response) -> str:
    data = _body(response)
    if not response.is_success:
        logger.error("PayPal create order error: %s", data)
        raise ProviderCreateError(details=data)
    return data["id"]


def _capture(response: httpx.Response, order_id: str) -> Any:
    data = _body(response)
    if not response.is_success:
        logger.error("PayPal capture error for %s: %s", order_id, data)
        raise ProviderCaptureError(details=data)
    return data


class _BaseClient:
    def __init__(
        self,
        config: PayPalConfig,
        *,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"base_url": self.base_url}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def _token_request(self) -> dict[str, Any]:
        return {
            "auth": (self.config.client_id, self.config.client_secret),
            "headers": {"Content-Type": "application/x-www-form-urlencoded"},
            "content": "grant_type=client_credentials",
        }

    @staticmethod
    def _bearer(token: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }


class PayPalClient(_BaseClient):
    """Blocking PayPal client backed by :class:`httpx.Client`."""

    def _http(self) -> httpx.Client:
        return httpx.Client(**self._client_kwargs())

    def get_access_token(self) -> str:
        """Exchange the client credentials for a bearer token.

        Raises:
            ProviderAuthError: PayPal rejected the credentials.
        """
        with self._http() as http:
            response = http.post(TOKEN_PATH, **self._token_request())
        return _access_token(response)

    def create_order(self, quote: Quote) -> str:
        """Create a CAPTURE-intent order for *quote* and return its id.

        Raises:
            ProviderAuthError: The token request failed.
            ProviderCreateError: PayPal rejected the order.
        """
        token = self.get_access_token()
        payload = build_order_payload(quote, brand_name=self.config.brand_name)
        with self._http() as http:
            response = http.post(ORDERS_PATH, json=payload, headers=self._bearer(token))
        order_id = _order_id(response)
        logger.info("Created PayPal order %s for %s %s", order_id, quote.value, quote.currency)
        return order_id

    def capture_order(self, order_id: str) -> Any:
        """Capture *order_id* and return PayPal's response unchanged.

        Raises:
            ProviderAuthError: The token request failed.
            ProviderCaptureError: PayPal rejected the capture.
        """
        token = self.get_access_token()
        with self._http() as http:
            response = http.post(capture_path(order_id), headers=self._bearer(token))
        data = _capture(response, order_id)
        logger.info("Captured PayPal order %s", order_id)
        return data


class AsyncPayPalClient(_BaseClient):
    """Async counterpart of :class:`PayPalClient` backed by :class:`httpx.AsyncClient`."""

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(**self._client_kwargs())

    async def get_access_token(self) -> str:
        async with self._http() as http:
            response = await http.post(TOKEN_PATH, **self._token_request())
        return _access_token(response)

    async def create_order(self, quote: Quote) -> str:
        token = await self.get_access_token()
        payload = build_order_payload(quote, brand_name=self.config.brand_name)
        async with self._http() as http:
            response = await http.post(ORDERS_PATH, json=payload, headers=self._bearer(token))
        order_id = _order_id(response)
        logger.info("Created PayPal order %s for %s %s", order_id, quote.value, quote.currency)
        return order_id

    async def capture_order(self, order_id: str) -> Any:
        token = await self.get_access_token()
        async with self._http() as http:
            response = await http.post(capture_path(order_id), headers=self._bearer(token))
        data = _capture(response, order_id)
        logger.info("Captured PayPal order %s", order_id)
        return data
