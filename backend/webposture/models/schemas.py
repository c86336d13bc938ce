from datetime import datetime
from typing import Any, Literal, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Severity = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]


class _WireModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Finding(_WireModel):
    model_config = ConfigDict(frozen=True)

    module: str
    title: str
    description: str
    severity: Severity
    recommendation: str
    score_impact: int = Field(ge=0)


class ScanSummary(_WireModel):
    total_checks: int
    passed_checks: int
    failed_checks: int


class ScanResult(_WireModel):
    url: str
    timestamp: datetime
    score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    findings: List[Finding] = Field(default_factory=list)
    summary: ScanSummary


class ScoreResult(_WireModel):
    score: int = Field(ge=0, le=100)
    risk_level: RiskLevel


class RateLimitDecision(_WireModel):
    allowed: bool
    retry_after_seconds: Optional[int] = None


class ScanRequest(BaseModel):
    # left untyped so non-string input reaches the validator and its error message
    url: Any = None


class ScanResponse(_WireModel):
    success: bool
    data: Optional[ScanResult] = None
    error: Optional[str] = None
