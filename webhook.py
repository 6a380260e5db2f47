"""Cashfree payment-status webhooks.

Cashfree signs each notification as base64(HMAC-SHA256(timestamp + body))
keyed by the client secret. The signature must be computed over the exact
bytes received; re-serialising the JSON first breaks verification.
"""

import base64
import hashlib
import hmac
import json
import logging

import booking_store
import settings
from errors import NotFoundError, SignatureError

logger = logging.getLogger(__name__)

SIGNATURE_HEADERS = ("x-webhook-signature", "x-cashfree-signature")
TIMESTAMP_HEADERS = ("x-webhook-timestamp", "x-cashfree-timestamp")

# Observed payload variants, tried in order.
ORDER_ID_PATHS = (
    ("order_id",),
    ("orderId",),
    ("data", "order_id"),
    ("data", "order", "order_id"),
)
STATUS_PATHS = (
    ("order_status",),
    ("status",),
    ("data", "order_status"),
    ("data", "payment", "payment_status"),
)

STATUS_PAID = "paid"
STATUS_FAILED = "failed"
STATUS_PENDING = "pending"


def first_header(headers, names) -> str:
    for name in names:
        value = headers.get(name)
        if value:
            return value
    return ""


def compute_signature(timestamp: str, raw_body: bytes, secret: str) -> str:
    message = (timestamp or "").encode("utf-8") + raw_body
    digest = hmac.new((secret or "").encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(raw_body: bytes, signature: str, timestamp: str, secret: str) -> None:
    if not signature:
        raise SignatureError("missing signature")
    expected = compute_signature(timestamp, raw_body, secret)
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
        raise SignatureError("signature mismatch")


def _lookup(payload, path):
    value = payload
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def extract_first(payload, candidates):
    """Return the first candidate path whose value is present and non-empty."""
    for path in candidates:
        value = _lookup(payload, path)
        if value is not None and value != "":
            return value
    return None


def classify_status(raw_status) -> str:
    status = str(raw_status or "").upper()
    if "SUCCESS" in status or "PAID" in status:
        return STATUS_PAID
    if "FAILED" in status:
        return STATUS_FAILED
    return STATUS_PENDING


def reconcile(raw_body: bytes, signature: str, timestamp: str):
    """Apply a signed webhook to its booking.

    Returns the updated booking, or None when the order id is unknown. Raises
    SignatureError before touching the store when verification fails.
    """
    verify_signature(raw_body, signature, timestamp, settings.CF_CLIENT_SECRET)

    payload = json.loads(raw_body)
    order_id = extract_first(payload, ORDER_ID_PATHS)
    raw_status = extract_first(payload, STATUS_PATHS)

    if not isinstance(order_id, str) or not order_id:
        logger.warning("Webhook without an order id")
        return None

    new_status = classify_status(raw_status)
    try:
        booking = booking_store.update_booking(
            order_id,
            {
                "status": new_status,
                "webhook": payload,
                "updatedAt": booking_store.utc_now(),
            },
        )
    except NotFoundError:
        logger.warning("Webhook for unknown order %s", order_id)
        return None

    logger.info("Booking %s updated to %s", order_id, new_status)
    return booking
