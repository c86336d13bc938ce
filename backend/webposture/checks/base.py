from typing import List, Protocol
import httpx
from webposture.models.schemas import Finding, Severity


class ScanModule(Protocol):
    name: str
    description: str
    # static estimate of outbound requests, charged against the scan budget
    request_cost: int

    async def run(self, client: httpx.AsyncClient, url: str) -> List[Finding]:
        ...


def make_finding(module: str, title: str, description: str, severity: Severity,
                 recommendation: str, score_impact: int) -> Finding:
    return Finding(
        module=module,
        title=title,
        description=description,
        severity=severity,
        recommendation=recommendation,
        score_impact=score_impact,
    )


def timeout_finding(module: str, description: str) -> Finding:
    return make_finding(module, "Request Timeout", description, "LOW",
                        "Ensure the target URL is accessible and responds in a timely manner.", 0)
