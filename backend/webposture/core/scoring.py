from typing import Iterable
from webposture.models.schemas import Finding, RiskLevel, ScoreResult

MAX_SCORE = 100
LOW_RISK_THRESHOLD = 75
MEDIUM_RISK_THRESHOLD = 60


def risk_level_for(score: int) -> RiskLevel:
    if score >= LOW_RISK_THRESHOLD:
        return "LOW"
    if score >= MEDIUM_RISK_THRESHOLD:
        return "MEDIUM"
    return "HIGH"


def calculate_score(findings: Iterable[Finding]) -> ScoreResult:
    score = MAX_SCORE - sum(f.score_impact for f in findings)
    score = min(max(score, 0), MAX_SCORE)
    return ScoreResult(score=score, risk_level=risk_level_for(score))
