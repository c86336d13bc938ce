from typing import Dict, List, NamedTuple
import httpx
from webposture.core.http import send
from webposture.checks.base import make_finding, timeout_finding
from webposture.models.schemas import Finding, Severity


class HeaderRule(NamedTuple):
    title: str
    impact: int
    recommendation: str


SECURITY_HEADERS: Dict[str, HeaderRule] = {
    "content-security-policy": HeaderRule(
        "Content Security Policy (CSP)", 15,
        "Implement a Content-Security-Policy header to prevent XSS and other code injection attacks."),
    "strict-transport-security": HeaderRule(
        "HTTP Strict Transport Security (HSTS)", 10,
        "Add a Strict-Transport-Security header to enforce HTTPS connections."),
    "x-frame-options": HeaderRule(
        "X-Frame-Options", 8,
        "Add an X-Frame-Options header (DENY or SAMEORIGIN) to prevent clickjacking."),
    "x-content-type-options": HeaderRule(
        "X-Content-Type-Options", 5,
        "Add X-Content-Type-Options: nosniff to prevent MIME type sniffing."),
    "x-xss-protection": HeaderRule(
        "X-XSS-Protection", 5,
        "Add an X-XSS-Protection header for additional XSS protection in older browsers."),
    "referrer-policy": HeaderRule(
        "Referrer Policy", 3,
        "Add a Referrer-Policy header (e.g. strict-origin-when-cross-origin) to limit referrer leakage."),
}

WEAK_CSP_TOKENS = ("unsafe-inline", "unsafe-eval")


def severity_for_impact(impact: int) -> Severity:
    if impact >= 10:
        return "HIGH"
    if impact >= 5:
        return "MEDIUM"
    return "LOW"


class SecurityHeadersCheck:
    name = "Security Headers"
    description = "Checks for presence of important security headers"
    request_cost = 1

    async def run(self, client: httpx.AsyncClient, url: str) -> List[Finding]:
        try:
            r = await send(client, "HEAD", url)
        except httpx.TimeoutException:
            return [timeout_finding(self.name, "The security headers request timed out.")]
        except httpx.HTTPError as e:
            return [make_finding(self.name, "Scan Error",
                                 f"Failed to fetch security headers: {e!r}", "LOW",
                                 "Verify the URL is correct and accessible.", 0)]

        findings: List[Finding] = []
        for header, rule in SECURITY_HEADERS.items():
            if not r.headers.get(header):
                findings.append(make_finding(
                    self.name,
                    f"Missing {rule.title}",
                    f"The {rule.title} header is not present in the response.",
                    severity_for_impact(rule.impact),
                    rule.recommendation,
                    rule.impact,
                ))

        csp = r.headers.get("content-security-policy", "")
        if any(token in csp for token in WEAK_CSP_TOKENS):
            findings.append(make_finding(
                self.name,
                "Weak Content Security Policy",
                "CSP contains unsafe-inline or unsafe-eval directives.",
                "MEDIUM",
                "Remove unsafe-inline and unsafe-eval from the CSP. Use nonces or hashes instead.",
                7,
            ))
        return findings
