import re
from typing import List
from urllib.parse import urlsplit
import httpx
from webposture.core.http import send
from webposture.checks.base import make_finding, timeout_finding
from webposture.models.schemas import Finding

ONE_YEAR = 31536000
MAX_AGE_RE = re.compile(r"max-age=\"?(\d+)", re.IGNORECASE)


class TLSCheck:
    name = "SSL/TLS Configuration"
    description = "Checks HTTPS usage and HSTS max-age"
    request_cost = 1

    async def run(self, client: httpx.AsyncClient, url: str) -> List[Finding]:
        if urlsplit(url).scheme.lower() != "https":
            return [make_finding(
                self.name,
                "Non-HTTPS Connection",
                "The website is not using HTTPS.",
                "CRITICAL",
                "Serve the site over HTTPS with a valid certificate (Let's Encrypt issues them for free).",
                30,
            )]

        try:
            r = await send(client, "HEAD", url)
        except httpx.TimeoutException:
            return [timeout_finding(self.name, "The SSL/TLS check timed out.")]

        hsts = r.headers.get("strict-transport-security")
        if not hsts:
            # missing HSTS is reported by the security headers check
            return []

        match = MAX_AGE_RE.search(hsts)
        if match and int(match.group(1)) < ONE_YEAR:
            return [make_finding(
                self.name,
                "Short HSTS Max-Age",
                f"HSTS max-age is less than 1 year ({ONE_YEAR} seconds).",
                "LOW",
                f"Set HSTS max-age to at least {ONE_YEAR} seconds, e.g. "
                "Strict-Transport-Security: max-age=31536000; includeSubDomains; preload",
                3,
            )]
        return []
