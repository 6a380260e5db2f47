import logging
import math
import time
from uuid import uuid4

import booking_store
import gateway
import settings
from errors import ValidationError
from pricing import compute_total

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "plan",
    "games",
    "bookingDate",
    "name",
    "phone",
    "address",
    "city",
    "paymentMethod",
)

STATUS_BOOKED_COD = "booked_cod"
STATUS_PENDING_PAYMENT = "pending_payment"


def _is_valid_amount(amount) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    # Oversized ints (e.g. from a huge hours value) cannot become floats.
    try:
        return math.isfinite(float(amount))
    except OverflowError:
        return False


def validate_payload(payload) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Invalid booking request")

    for field in REQUIRED_FIELDS:
        value = payload.get(field)
        # An empty games list is a valid booking with no games.
        if field == "games":
            if value is None:
                raise ValidationError("Missing games")
            if not isinstance(value, list):
                raise ValidationError("Invalid games")
            continue
        if not value or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"Missing {field}")

    hours = payload.get("hours")
    if hours not in (None, "", 0):
        try:
            valid_hours = int(hours) == float(hours) and int(hours) > 0
        except (TypeError, ValueError, OverflowError):
            valid_hours = False
        if isinstance(hours, bool) or not valid_hours:
            raise ValidationError("Invalid hours")

    return payload


def new_order_id() -> str:
    return f"{settings.ORDER_ID_PREFIX}_{int(time.time() * 1000)}_{uuid4().hex[:10]}"


def initial_status(payment_method) -> str:
    if payment_method == "cod":
        return STATUS_BOOKED_COD
    return STATUS_PENDING_PAYMENT


def create_order(payload) -> dict:
    """Price a booking, open the gateway order and persist the booking.

    Nothing is written when validation or the gateway call fails.
    """
    payload = validate_payload(payload)

    calc = compute_total(payload)
    amount = calc.get("total")
    if not _is_valid_amount(amount):
        raise ValidationError("Invalid amount")

    order_id = new_order_id()
    gateway_response = gateway.create_gateway_order(order_id, amount, payload)
    session_id = gateway.extract_session_id(gateway_response)

    now = booking_store.utc_now()
    record = {
        "orderId": order_id,
        "payload": payload,
        "calc": calc,
        "amount": amount,
        "status": initial_status(payload.get("paymentMethod")),
        "createdAt": now,
        "updatedAt": now,
        "gatewayResponse": gateway_response,
    }
    booking_store.put_booking(record)
    logger.info("Booking %s created (%s, amount %s)", order_id, record["status"], amount)

    return {
        "success": True,
        "orderId": order_id,
        "amount": amount,
        "paymentSessionId": session_id,
    }
