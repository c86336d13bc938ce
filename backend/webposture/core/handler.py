import logging
from typing import Optional
import httpx
from webposture.core.engine import run_scan
from webposture.core.rate_limiter import RateLimiter
from webposture.core.url_validator import URLValidationError, validate_target_url
from webposture.models.schemas import ScanRequest, ScanResponse

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown-client"
GENERIC_ERROR = "An unexpected error occurred"


async def perform_scan(request: ScanRequest, client_id: str, limiter: RateLimiter,
                       client: Optional[httpx.AsyncClient] = None) -> ScanResponse:
    """
    Throttle, validate, scan and score one request. Never raises: every
    failure is reported through ``ScanResponse.error``.
    """
    try:
        decision = limiter.check(client_id or UNKNOWN_CLIENT)
        if not decision.allowed:
            logger.info(f"Rate limit hit for {client_id!r}")
            return ScanResponse(
                success=False,
                error=f"Rate limit exceeded. Please try again in {decision.retry_after_seconds} seconds.",
            )

        try:
            target = validate_target_url(request.url)
        except URLValidationError as e:
            logger.info(f"Rejected scan target {request.url!r}: {e}")
            return ScanResponse(success=False, error=str(e) or "Invalid URL")

        # the caller's URL is reported as given, not re-assembled from the parse
        result = await run_scan(request.url.strip(), client=client)
        return ScanResponse(success=True, data=result)
    except Exception:
        logger.exception("Scan error")
        return ScanResponse(success=False, error=GENERIC_ERROR)
