"""Quart async app using flask-paypal-checkout.

Requires the quart extra::

    pip install "flask-paypal-checkout[quart]"

Run with::

    python examples/quart_app.py

It serves the same storefront page from ``public/`` and the same endpoints
as ``storefront_app.py``. No CORS headers are added, so the page must be
loaded from this server. For example::

    curl -X POST http://localhost:3000/api/paypal/create-order \\
         -H "Content-Type: application/json" \\
         -d '{"productId": "cloudrest-cozy-dog-bed"}'
"""

import logging
from pathlib import Path

from quart import Quart

from flask_paypal_checkout import FlaskPayPal, PayPalConfig

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("storefront")

config = PayPalConfig.from_env()

app = Quart(
    __name__,
    static_folder=str(Path(__file__).parent / "public"),
    static_url_path="",
)

# FlaskPayPal detects Quart and registers the async blueprint automatically
ext = FlaskPayPal(app, config=config)


@app.route("/")
async def index():
    return await app.send_static_file("index.html")


if __name__ == "__main__":
    logger.info("Server listening on %s (env=%s)", config.port, config.environment)
    app.run(port=config.port)
