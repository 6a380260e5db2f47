import json
import logging
import os
import tempfile
from datetime import datetime
from threading import Lock

import settings
from errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

# Serialises read-modify-write cycles inside this process. Separate processes
# sharing the file are still last-write-wins.
_bookings_lock = Lock()


def utc_now() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _bookings_path(path=None) -> str:
    return path or settings.BOOKINGS_FILE


def _ensure_storage_file(path: str) -> None:
    if os.path.exists(path):
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("")


def load_bookings(path=None) -> dict:
    """Return every stored booking keyed by order id.

    A missing, empty or corrupt file reads as an empty store.
    """
    path = _bookings_path(path)
    try:
        _ensure_storage_file(path)
        with open(path, "r", encoding="utf-8") as handle:
            raw = handle.read().strip()
    except OSError:
        logger.exception("Could not read bookings file %s", path)
        return {}

    if not raw:
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.error("Bookings file %s is not valid JSON; treating it as empty", path)
        return {}

    if not isinstance(data, dict):
        logger.error("Bookings file %s does not hold an object; treating it as empty", path)
        return {}
    return data


def save_bookings(bookings: dict, path=None) -> None:
    """Rewrite the whole store.

    The data goes to a temp file beside the store which then replaces it, so
    readers see either the old or the new contents, never a partial file.
    """
    path = _bookings_path(path)
    directory = os.path.dirname(os.path.abspath(path))
    temp_path = None
    try:
        fd, temp_path = tempfile.mkstemp(prefix=".bookings-", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            json.dump(bookings, file, indent=2)
        os.replace(temp_path, path)
        temp_path = None
    except OSError as exc:
        logger.exception("Could not write bookings file %s", path)
        raise StoreError(f"Could not write bookings file {path}") from exc
    finally:
        if temp_path and os.path.exists(temp_path):
            os.remove(temp_path)


def get_booking(order_id: str, path=None) -> dict:
    booking = load_bookings(path).get(order_id)
    if not isinstance(booking, dict):
        raise NotFoundError(order_id)
    return booking


def put_booking(record: dict, path=None) -> dict:
    order_id = record["orderId"]
    with _bookings_lock:
        bookings = load_bookings(path)
        bookings[order_id] = record
        save_bookings(bookings, path)
    return record


def update_booking(order_id: str, changes: dict, path=None) -> dict:
    """Merge ``changes`` into an existing booking and rewrite the store."""
    with _bookings_lock:
        bookings = load_bookings(path)
        booking = bookings.get(order_id)
        if not isinstance(booking, dict):
            raise NotFoundError(order_id)
        booking.update(changes)
        bookings[order_id] = booking
        save_bookings(bookings, path)
    return booking
