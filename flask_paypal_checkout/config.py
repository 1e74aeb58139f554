"""Credentials and environment selection for the PayPal REST API.

A :class:`PayPalConfig` is built once at startup and handed to
:class:`~flask_paypal_checkout.FlaskPayPal`; the views never read the process
environment themselves::

    from flask_paypal_checkout.config import PayPalConfig

    config = PayPalConfig.from_env()          # reads .env + os.environ
    ext = FlaskPayPal(app, config=config)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

PRODUCTION = "production"
SANDBOX = "sandbox"

#: Provider base URLs keyed by environment flag.
BASE_URLS: dict[str, str] = {
    PRODUCTION: "https://api-m.paypal.com",
    SANDBOX: "https://api-m.sandbox.paypal.com",
}

DEFAULT_PORT = 3000
DEFAULT_BRAND_NAME = "FluffyFriend"


def normalize_environment(value: str | None) -> str:
    """Map any flag other than ``"production"`` to ``"sandbox"``."""
    return PRODUCTION if (value or "").strip().lower() == PRODUCTION else SANDBOX


@dataclass(frozen=True)
class PayPalConfig:
    """Immutable PayPal settings.

    Attributes:
        client_id: REST app client id.
        client_secret: REST app secret.
        environment: ``"production"`` or ``"sandbox"``.
        port: Port the example servers listen on.
        brand_name: Shown on the PayPal checkout page.
    """

    client_id: str = ""
    client_secret: str = ""
    environment: str = SANDBOX
    port: int = DEFAULT_PORT
    brand_name: str = DEFAULT_BRAND_NAME

    def __post_init__(self) -> None:
        object.__setattr__(self, "environment", normalize_environment(self.environment))

    @property
    def base_url(self) -> str:
        return BASE_URLS[self.environment]

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike | None = None) -> "PayPalConfig":
        """Build a config from ``.env`` and the process environment.

        Variables already present in the environment win over the ``.env``
        file.
        """
        load_dotenv(dotenv_path)
        return cls(
            client_id=os.getenv("PAYPAL_CLIENT_ID", ""),
            client_secret=os.getenv("PAYPAL_CLIENT_SECRET", ""),
            environment=os.getenv("PAYPAL_ENV", SANDBOX),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            brand_name=os.getenv("PAYPAL_BRAND_NAME", DEFAULT_BRAND_NAME),
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "PayPalConfig":
        """Build a config from Flask-style ``PAYPAL_*`` keys."""
        return cls(
            client_id=mapping.get("PAYPAL_CLIENT_ID") or "",
            client_secret=mapping.get("PAYPAL_CLIENT_SECRET") or "",
            environment=mapping.get("PAYPAL_ENV") or SANDBOX,
            port=int(mapping.get("PORT") or DEFAULT_PORT),
            brand_name=mapping.get("PAYPAL_BRAND_NAME") or DEFAULT_BRAND_NAME,
        )
