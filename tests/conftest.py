"""Pytest configuration and fixtures."""

import httpx
import pytest

from webposture.core.http import client_for

SECURE_HEADERS = {
    "Content-Security-Policy": "default-src 'self'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_client():
    """Factory: build a scanner client whose requests go to ``handler``."""
    def factory(handler, timeout=None):
        return client_for(transport=httpx.MockTransport(handler), timeout=timeout)
    return factory


@pytest.fixture
def secure_headers():
    return dict(SECURE_HEADERS)


def respond(headers=None, status_code=200):
    """Build a MockTransport handler returning the same response every time."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, headers=headers or {})
    return handler


def timeout_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)
