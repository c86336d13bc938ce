import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    request_timeout: float = _env_float("WEBPOSTURE_REQUEST_TIMEOUT", 5.0)
    max_requests_per_scan: int = _env_int("WEBPOSTURE_MAX_REQUESTS_PER_SCAN", 20)
    # upper bound of findings the module set can produce; not recounted per run
    total_checks: int = _env_int("WEBPOSTURE_TOTAL_CHECKS", 15)
    rate_limit_max: int = _env_int("WEBPOSTURE_RATE_LIMIT_MAX", 1)
    rate_limit_window: float = _env_float("WEBPOSTURE_RATE_LIMIT_WINDOW", 5 * 60)
    rate_limit_sweep: float = _env_float("WEBPOSTURE_RATE_LIMIT_SWEEP", 60)
    cors_origins: List[str] = field(
        default_factory=lambda: _env_list(
            "WEBPOSTURE_CORS_ORIGINS", ["http://localhost:3000", "http://127.0.0.1:3000"]
        )
    )
    log_level: str = os.getenv("WEBPOSTURE_LOG_LEVEL", "INFO")
    user_agent: str = os.getenv(
        "WEBPOSTURE_USER_AGENT",
        "WebPostureScanner/0.1 (+https://example.local) "
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    )


settings = Settings()
