from typing import List
import httpx
from webposture.core.http import send
from webposture.checks.base import make_finding, timeout_finding
from webposture.models.schemas import Finding

PROBE_ORIGIN = "https://evil.com"
PROBE_DOMAIN = "evil.com"


class CORSCheck:
    name = "CORS Configuration"
    description = "Checks for insecure CORS configurations"
    request_cost = 1

    async def run(self, client: httpx.AsyncClient, url: str) -> List[Finding]:
        """
        Active preflight probe with an attacker-controlled Origin.
        Wildcard origin, origin reflection and wildcard methods are reported
        independently, so one response can yield up to three findings.
        """
        try:
            r = await send(client, "OPTIONS", url, headers={
                "Origin": PROBE_ORIGIN,
                "Access-Control-Request-Method": "POST",
            })
        except httpx.TimeoutException:
            return [timeout_finding(self.name, "The CORS check timed out.")]

        acao = r.headers.get("access-control-allow-origin")
        acac = (r.headers.get("access-control-allow-credentials") or "").strip().lower()
        methods = r.headers.get("access-control-allow-methods")
        findings: List[Finding] = []

        if acao == "*":
            with_credentials = acac == "true"
            findings.append(make_finding(
                self.name,
                "Wildcard CORS Configuration",
                "Access-Control-Allow-Origin is set to '*'"
                + (" with credentials allowed." if with_credentials else "."),
                "CRITICAL" if with_credentials else "HIGH",
                "Never combine wildcard CORS with credentials. Specify exact origins instead."
                if with_credentials else
                "Specify exact allowed origins instead of '*' to prevent unauthorized cross-origin access.",
                25 if with_credentials else 20,
            ))

        if acao and PROBE_DOMAIN in acao:
            findings.append(make_finding(
                self.name,
                "CORS Origin Reflection",
                "Server reflects the Origin header without validation.",
                "HIGH",
                "Use an allowlist of trusted origins instead of echoing the Origin header.",
                20,
            ))

        if methods and "*" in methods:
            findings.append(make_finding(
                self.name,
                "Permissive CORS Methods",
                "All HTTP methods are allowed via CORS.",
                "MEDIUM",
                "Explicitly list only the HTTP methods the endpoint needs.",
                8,
            ))
        return findings
