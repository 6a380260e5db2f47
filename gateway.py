"""Cashfree order creation."""

import logging

import requests

import settings
from errors import GatewayError

logger = logging.getLogger(__name__)


def gateway_url() -> str:
    if settings.CF_ENV == "PRODUCTION":
        return settings.CF_PRODUCTION_URL
    return settings.CF_SANDBOX_URL


def gateway_headers() -> dict:
    return {
        "Content-Type": "application/json",
        "x-api-version": settings.CF_API_VERSION,
        "x-client-id": settings.CF_CLIENT_ID,
        "x-client-secret": settings.CF_CLIENT_SECRET,
    }


def _return_url(order_id: str) -> str:
    return settings.RETURN_URL or f"{settings.FRONTEND_ORIGIN}/?order_id={order_id}"


def _notify_url() -> str:
    return settings.WEBHOOK_URL or f"{settings.BACKEND_ORIGIN}/webhook"


def build_order_request(order_id: str, amount, payload: dict) -> dict:
    phone = payload.get("phone")
    return {
        "order_currency": settings.ORDER_CURRENCY,
        "order_amount": amount,
        "customer_details": {
            "customer_id": phone or order_id,
            "customer_name": payload.get("name") or "",
            "customer_email": payload.get("email") or "",
            "customer_phone": phone,
        },
        "order_meta": {"return_url": _return_url(order_id)},
        "notify_url": _notify_url(),
        "order_id": order_id,
    }


def _error_detail(response):
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


def create_gateway_order(order_id: str, amount, payload: dict) -> dict:
    """Open a payment order and return the gateway's JSON response.

    Raises GatewayError when the gateway cannot be reached or answers with a
    non-2xx status. The call is not retried.
    """
    body = build_order_request(order_id, amount, payload)
    try:
        response = requests.post(
            gateway_url(),
            headers=gateway_headers(),
            json=body,
            timeout=settings.CF_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as exc:
        detail = _error_detail(getattr(exc, "response", None))
        logger.error("Gateway order creation failed for %s: %s", order_id, detail or exc)
        raise GatewayError(str(exc), detail=detail if detail is not None else str(exc)) from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise GatewayError("Gateway returned a non-JSON response", detail=response.text) from exc

    if not isinstance(data, dict):
        return {"raw_response": data}
    return data


def extract_session_id(response: dict):
    return response.get("payment_session_id") or response.get("paymentSessionId") or None
