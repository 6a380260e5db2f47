import logging
import logging.config

from flask import Flask, request, jsonify
from flask_cors import CORS

import booking_store
import settings
import webhook
from errors import GatewayError, NotFoundError, SignatureError, ValidationError
from orders import create_order

logging.config.dictConfig(settings.LOGGING)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# ✅ Restrict to the booking site's origin in production
CORS(app, resources={r"/*": {"origins": settings.FRONTEND_ORIGIN or "*"}})


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


# --- Create a booking and open the payment order ---
@app.route("/create-order", methods=["POST"])
def create_order_route():
    data = request.get_json(silent=True) or {}

    try:
        result = create_order(data)
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    except GatewayError as exc:
        logger.error("/create-order gateway error: %s", exc.detail)
        return jsonify({"error": "server_error", "detail": exc.detail}), 500
    except Exception as exc:
        logger.exception("/create-order error")
        return jsonify({"error": "server_error", "detail": str(exc)}), 500

    return jsonify(result)


# --- Cashfree payment-status webhook (raw body is needed for the signature) ---
@app.route("/webhook", methods=["POST"])
def payment_webhook():
    raw_body = request.get_data(cache=True, as_text=False, parse_form_data=False)
    signature = webhook.first_header(request.headers, webhook.SIGNATURE_HEADERS)
    timestamp = webhook.first_header(request.headers, webhook.TIMESTAMP_HEADERS)

    try:
        webhook.reconcile(raw_body, signature, timestamp)
    except SignatureError as exc:
        logger.warning("Invalid webhook signature: %s", exc)
        return "invalid signature", 400
    except Exception:
        logger.exception("webhook handler error")
        return "server error", 500

    return "OK", 200


# --- Fetch a stored booking ---
@app.route("/booking/<order_id>", methods=["GET"])
def get_booking(order_id):
    try:
        booking = booking_store.get_booking(order_id)
    except NotFoundError:
        return jsonify({"error": "not found"}), 404
    return jsonify(booking)


if __name__ == '__main__':
    import sys
    # Use PORT if no port is specified, or read from command line
    port = int(sys.argv[1]) if len(sys.argv) > 1 else settings.PORT
    app.run(host='0.0.0.0', port=port, debug=False)
