"""
Target URL vetting. This is the SSRF boundary: nothing may dereference a
user-supplied URL before it has passed ``validate_target_url``.

Matching is done on the literal hostname only. A public name that resolves
to a private address at probe time is not caught here. Neither is a public
host that redirects to an internal address: the scanner client follows
redirects, and redirect targets never pass through this check.
"""
import re
from typing import List, Pattern
from urllib.parse import SplitResult, urlsplit

ALLOWED_SCHEMES = ("http", "https")

BLOCKED_HOST_PATTERNS: List[Pattern[str]] = [
    # loopback
    re.compile(r"^127\."),
    re.compile(r"^localhost$"),
    re.compile(r"^::1$"),
    # private ranges
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^192\.168\."),
    # link-local
    re.compile(r"^169\.254\."),
    re.compile(r"^fe80:"),
    # broadcast / multicast / reserved
    re.compile(r"^0\."),
    re.compile(r"^224\."),
    re.compile(r"^255\."),
]

LOCALHOST_NAMES = ("localhost", "0.0.0.0")
METADATA_HOSTS = ("169.254.169.254", "metadata.google.internal", "metadata")


class URLValidationError(ValueError):
    """Raised when a target URL is rejected. The message is user-facing."""


def validate_target_url(raw) -> SplitResult:
    if not raw or not isinstance(raw, str):
        raise URLValidationError("URL is required and must be a string")

    try:
        parsed = urlsplit(raw.strip())
        parsed.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        raise URLValidationError("Invalid URL format")
    if not parsed.scheme:
        raise URLValidationError("Invalid URL format")

    scheme = parsed.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise URLValidationError(
            f"Only HTTP and HTTPS protocols are allowed. Got: {scheme}:"
        )

    hostname = (parsed.hostname or "").lower()
    if not hostname or any(ch.isspace() for ch in hostname):
        raise URLValidationError("Invalid URL format")

    for pattern in BLOCKED_HOST_PATTERNS:
        if pattern.search(hostname):
            raise URLValidationError("Cannot scan internal/private IP addresses")

    if hostname in LOCALHOST_NAMES:
        raise URLValidationError("Cannot scan localhost")

    if any(host in hostname for host in METADATA_HOSTS):
        raise URLValidationError("Cannot scan cloud metadata endpoints")

    return parsed
