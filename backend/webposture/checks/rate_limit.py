import asyncio
from typing import List, Optional
import httpx
from webposture.core.http import send
from webposture.checks.base import make_finding
from webposture.models.schemas import Finding

PROBE_COUNT = 10

RATE_LIMIT_HEADER_PREFIXES = ("x-ratelimit-", "x-rate-limit-", "ratelimit-")
RETRY_AFTER = "retry-after"


def carries_rate_limit_signal(r: httpx.Response) -> bool:
    if r.status_code == 429:
        return True
    for name in r.headers.keys():
        lower = name.lower()
        if lower == RETRY_AFTER or lower.startswith(RATE_LIMIT_HEADER_PREFIXES):
            return True
    return False


class RateLimitCheck:
    name = "Rate Limiting"
    description = "Checks if the server implements rate limiting"
    request_cost = PROBE_COUNT

    async def _probe(self, client: httpx.AsyncClient, url: str) -> Optional[httpx.Response]:
        # a failed or timed-out probe counts as no response
        try:
            return await send(client, "HEAD", url)
        except httpx.HTTPError:
            return None

    async def run(self, client: httpx.AsyncClient, url: str) -> List[Finding]:
        responses = await asyncio.gather(*[self._probe(client, url) for _ in range(PROBE_COUNT)])
        answered = [r for r in responses if r is not None]

        if not answered:
            return [make_finding(
                self.name,
                "Rate Limit Check Error",
                f"None of the {PROBE_COUNT} probe requests received a response.",
                "LOW",
                "Manual verification recommended.",
                0,
            )]

        if any(carries_rate_limit_signal(r) for r in answered):
            return []

        return [make_finding(
            self.name,
            "No Rate Limiting Detected",
            f"Sent {PROBE_COUNT} rapid requests without encountering rate limits or rate limit headers.",
            "MEDIUM",
            "Implement rate limiting to prevent abuse and DoS attacks, and advertise it with "
            "headers such as X-RateLimit-Limit and X-RateLimit-Remaining.",
            10,
        )]
