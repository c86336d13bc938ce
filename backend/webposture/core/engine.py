import logging
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence
import httpx
from webposture.core.config import settings
from webposture.core.http import client_for
from webposture.core.scoring import calculate_score
from webposture.models.schemas import Finding, ScanResult, ScanSummary
from webposture.checks.base import ScanModule
from webposture.checks.headers import SecurityHeadersCheck
from webposture.checks.cors import CORSCheck
from webposture.checks.rate_limit import RateLimitCheck
from webposture.checks.tls import TLSCheck

logger = logging.getLogger(__name__)

# execution order is part of the contract: findings are reported in this order
CHECKS: List[ScanModule] = [
    SecurityHeadersCheck(),
    CORSCheck(),
    RateLimitCheck(),
    TLSCheck(),
]


async def run_checks(client: httpx.AsyncClient, url: str,
                     checks: Sequence[ScanModule],
                     max_requests: int) -> List[Finding]:
    """
    Run checks one after another under the outbound request budget.

    Each check is charged its static ``request_cost`` once it finishes,
    whether it succeeded or failed. When the budget is already spent the
    remaining checks are skipped. A failing check contributes no findings.
    """
    findings: List[Finding] = []
    request_count = 0
    for check in checks:
        if request_count >= max_requests:
            logger.warning(f"Request limit reached ({max_requests}). Skipping remaining modules.")
            break
        logger.info(f"Running module: {check.name}")
        try:
            findings.extend(await check.run(client, url))
        except Exception:
            logger.exception(f"Module {check.name} failed")
        request_count += getattr(check, "request_cost", 1)
    return findings


async def run_scan(url: str,
                   checks: Optional[Sequence[ScanModule]] = None,
                   client: Optional[httpx.AsyncClient] = None,
                   max_requests: Optional[int] = None,
                   total_checks: Optional[int] = None) -> ScanResult:
    started = time.monotonic()
    checks = CHECKS if checks is None else checks
    max_requests = settings.max_requests_per_scan if max_requests is None else max_requests
    total_checks = settings.total_checks if total_checks is None else total_checks

    if client is None:
        async with client_for() as own_client:
            findings = await run_checks(own_client, url, checks, max_requests)
    else:
        findings = await run_checks(client, url, checks, max_requests)

    scored = calculate_score(findings)
    result = ScanResult(
        url=url,
        timestamp=datetime.now(timezone.utc),
        score=scored.score,
        risk_level=scored.risk_level,
        findings=findings,
        summary=ScanSummary(
            total_checks=total_checks,
            passed_checks=total_checks - len(findings),
            failed_checks=len(findings),
        ),
    )
    logger.info(f"Scan of {url} completed in {(time.monotonic() - started) * 1000:.0f}ms "
                f"(score={result.score}, risk={result.risk_level})")
    return result
