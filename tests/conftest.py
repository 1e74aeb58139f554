"""Shared pytest fixtures for flask-paypal-checkout tests."""

import json

import httpx
import pytest
from flask import Flask

from flask_paypal_checkout import FlaskPayPal, PayPalConfig


class FakePayPal:
    """Scriptable stand-in for the PayPal REST API.

    Every request is recorded in :attr:`requests`; each endpoint answers with
    the status/body stored on the instance so tests can simulate failures.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.token_body = {"access_token": "A21AAtoken", "token_type": "Bearer", "expires_in": 32400}
        self.create_status = 201
        self.create_body = {"id": "5O190127TN364715T", "status": "CREATED"}
        self.capture_status = 201
        self.capture_body = {
            "id": "5O190127TN364715T",
            "status": "COMPLETED",
            "purchase_units": [
                {"payments": {"captures": [{"id": "3C679366HH908993F", "status": "COMPLETED"}]}}
            ],
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/v1/oauth2/token":
            return self._respond(self.token_status, self.token_body)
        if path == "/v2/checkout/orders":
            return self._respond(self.create_status, self.create_body)
        if path.endswith("/capture"):
            return self._respond(self.capture_status, self.capture_body)
        return httpx.Response(404, json={"name": "RESOURCE_NOT_FOUND"})

    @staticmethod
    def _respond(status, body):
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    # Convenience accessors ------------------------------------------------

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def json_body(self, index: int):
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_paypal():
    return FakePayPal()


@pytest.fixture
def transport(fake_paypal):
    return httpx.MockTransport(fake_paypal)


@pytest.fixture
def paypal_config():
    return PayPalConfig(client_id="test-client", client_secret="test-secret")


@pytest.fixture
def app(paypal_config, transport):
    """Flask app wired to the fake PayPal API."""
    application = Flask(__name__)
    application.config["TESTING"] = True

    FlaskPayPal(application, config=paypal_config, transport=transport)

    yield application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def ext(app):
    """The FlaskPayPal extension instance."""
    return app.extensions["paypal"]
