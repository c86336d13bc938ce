import asyncio
import httpx
from contextlib import asynccontextmanager
from typing import Optional
from webposture.core.config import settings


def build_timeout(seconds: Optional[float] = None) -> httpx.Timeout:
    return httpx.Timeout(seconds if seconds is not None else settings.request_timeout)


def call_deadline(client: httpx.AsyncClient) -> float:
    return client.timeout.read or settings.request_timeout


async def send(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    """
    Issue one request under a hard wall-clock deadline.

    httpx timeouts bound each phase (connect, every read, each redirect hop)
    separately, so a slow-dripping target could hold a call open forever.
    The deadline covers the whole call including redirects. Expiry surfaces
    as ``httpx.TimeoutException`` like any other timeout.
    """
    seconds = call_deadline(client)
    try:
        return await asyncio.wait_for(client.request(method, url, **kwargs), seconds)
    except asyncio.TimeoutError:
        raise httpx.TimeoutException(f"{method} {url} exceeded the {seconds}s deadline") from None


@asynccontextmanager
async def client_for(transport: Optional[httpx.AsyncBaseTransport] = None,
                     timeout: Optional[float] = None):
    async with httpx.AsyncClient(
        timeout=build_timeout(timeout),
        headers={"User-Agent": settings.user_agent, "Accept": "*/*"},
        follow_redirects=True,
        http2=True,
        verify=True,
        transport=transport,
    ) as client:
        yield client
