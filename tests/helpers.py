"""Fakes shared by the test modules."""
import json

import requests

TEST_SECRET = "cf_test_secret"


class FakeResponse:
    def __init__(self, status_code=200, data=None, text=None):
        self.status_code = status_code
        self._data = data
        self.text = text if text is not None else (json.dumps(data) if data is not None else "")

    def json(self):
        if self._data is None:
            raise ValueError("no JSON body")
        return self._data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


class FakeGateway:
    """Stands in for ``requests.post`` and records every call."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(200, {"payment_session_id": "session_123", "order_status": "ACTIVE"})
        self.error = None

    def __call__(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response
