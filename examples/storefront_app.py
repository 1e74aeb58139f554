"""Storefront server: static shop page plus the PayPal checkout API.

Install the example extra and put your sandbox credentials in ``.env``::

    pip install "flask-paypal-checkout[examples]"

    PAYPAL_CLIENT_ID=...
    PAYPAL_CLIENT_SECRET=...
    PAYPAL_ENV=sandbox
    PORT=3000

Run with::

    python examples/storefront_app.py

Then open http://localhost:3000/ or use curl:

    # Create an order for two large dog beds
    curl -X POST http://localhost:3000/api/paypal/create-order \\
         -H "Content-Type: application/json" \\
         -d '{"productId": "cloudrest-cozy-dog-bed", "size": "L", "qty": 2}'

    # Capture it once the buyer approved it (replace ORDER_ID)
    curl -X POST http://localhost:3000/api/paypal/capture-order \\
         -H "Content-Type: application/json" \\
         -d '{"orderID": "ORDER_ID"}'

    # Simulated webhook
    curl -X POST http://localhost:3000/api/paypal/webhook \\
         -H "Content-Type: application/json" \\
         -d '{"event_type": "PAYMENT.CAPTURE.COMPLETED"}'
"""

import logging
from pathlib import Path

from flask import Flask
from flask_cors import CORS

from flask_paypal_checkout import FlaskPayPal, PayPalConfig

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("storefront")

config = PayPalConfig.from_env()

app = Flask(
    __name__,
    static_folder=str(Path(__file__).parent / "public"),
    static_url_path="",
)
CORS(app)

ext = FlaskPayPal(app, config=config)


@app.route("/")
def index():
    return app.send_static_file("index.html")


if __name__ == "__main__":
    logger.info("Server listening on %s (env=%s)", config.port, config.environment)
    app.run(port=config.port)
