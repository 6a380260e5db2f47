"""Service configuration.

This module is safe to commit.

Secrets MUST be supplied via environment variables in production (e.g. Render):
- CF_CLIENT_ID / CF_CLIENT_SECRET (Cashfree credentials, the secret also signs webhooks)
- FRONTEND_ORIGIN / BACKEND_ORIGIN (used for CORS and the gateway callback URLs)
"""

import os

from dotenv import load_dotenv

load_dotenv()


PORT = int(os.getenv("PORT", "5000") or 5000)

# Origins. FRONTEND_ORIGIN also restricts CORS; leave empty to allow any origin.
FRONTEND_ORIGIN = str(os.getenv("FRONTEND_ORIGIN", "") or "").strip()
BACKEND_ORIGIN = str(os.getenv("BACKEND_ORIGIN", "") or "").strip()

# Explicit overrides for the URLs handed to the gateway.
RETURN_URL = str(os.getenv("RETURN_URL", "") or "").strip()
WEBHOOK_URL = str(os.getenv("WEBHOOK_URL", "") or "").strip()

# Cashfree
CF_ENV = str(os.getenv("CF_ENV", "SANDBOX") or "SANDBOX").strip().upper()
CF_API_VERSION = str(os.getenv("CF_API_VERSION", "2025-01-01") or "2025-01-01").strip()
CF_CLIENT_ID = str(os.getenv("CF_CLIENT_ID", "") or "").strip()
CF_CLIENT_SECRET = str(os.getenv("CF_CLIENT_SECRET", "") or "").strip()
CF_TIMEOUT_SECONDS = float(os.getenv("CF_TIMEOUT_SECONDS", "15") or 15)

CF_PRODUCTION_URL = "https://api.cashfree.com/pg/orders"
CF_SANDBOX_URL = "https://sandbox.cashfree.com/pg/orders"

# Orders
ORDER_CURRENCY = str(os.getenv("ORDER_CURRENCY", "INR") or "INR").strip()
ORDER_ID_PREFIX = str(os.getenv("ORDER_ID_PREFIX", "LEAZO") or "LEAZO").strip()

# Storage
BOOKINGS_FILE = os.getenv("BOOKINGS_FILE", "bookings.json")

# Logging
LOG_LEVEL = str(os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}
