"""Weighted-sum risk heuristics.

Scores are a fixed formula over a record's attributes, not a fitted model. Each
profile lists factors that add points when their condition holds; the total is
clamped to the profile's bounds and cut into Low/Medium/High with strict ``>``
thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from hashlib import sha256
from typing import Callable, Dict, Optional, Tuple

from insights.records import Record, get_category, get_flag, get_number


class RiskTier(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class RiskFactor:
    name: str
    points: float
    condition: Callable[[Record], bool]


@dataclass(frozen=True)
class ScoringProfile:
    name: str
    factors: Tuple[RiskFactor, ...]
    base: float = 0.0
    floor: float = 0.0
    ceiling: float = 100.0
    high_above: float = 70.0
    medium_above: float = 40.0
    # Name of a dashboard dimension whose group rate (in percent) seeds the score.
    baseline_dimension: Optional[str] = None

    def tier_for(self, score: float) -> RiskTier:
        if score > self.high_above:
            return RiskTier.HIGH
        if score > self.medium_above:
            return RiskTier.MEDIUM
        return RiskTier.LOW

    def clamp(self, score: float) -> float:
        return max(self.floor, min(self.ceiling, score))


@dataclass(frozen=True)
class RiskAssessment:
    score: float
    tier: RiskTier
    factors: Tuple[str, ...] = ()

    def as_dict(self) -> Dict[str, object]:
        return {"score": self.score, "tier": self.tier.value, "factors": list(self.factors)}


def deterministic_jitter(record_id: Optional[str], amplitude: float) -> float:
    """Map a stable id onto ``[-amplitude, +amplitude]``; 0 without an id or amplitude."""
    if not record_id or amplitude <= 0:
        return 0.0
    digest = sha256(record_id.encode("utf-8")).digest()
    unit = int.from_bytes(digest[:8], "big") / float(2**64 - 1)
    return (unit * 2.0 - 1.0) * amplitude


def score(
    record: Record,
    profile: ScoringProfile,
    *,
    baseline: float = 0.0,
    record_id: Optional[str] = None,
    jitter: float = 0.0,
) -> RiskAssessment:
    total = profile.base + baseline
    hits = []
    for factor in profile.factors:
        if factor.condition(record):
            total += factor.points
            hits.append(factor.name)
    total += deterministic_jitter(record_id, jitter)
    clamped = round(profile.clamp(total), 2)
    return RiskAssessment(score=clamped, tier=profile.tier_for(clamped), factors=tuple(hits))


CHURN_PROFILE = ScoringProfile(
    name="churn",
    factors=(
        RiskFactor("month_to_month_contract", 35, lambda r: get_category(r, "Contract") == "Month-to-month"),
        RiskFactor("one_year_contract", 15, lambda r: get_category(r, "Contract") == "One year"),
        RiskFactor("short_tenure", 20, lambda r: get_number(r, "tenure") < 12),
        RiskFactor("high_monthly_charges", 15, lambda r: get_number(r, "MonthlyCharges") > 80),
        RiskFactor("no_tech_support", 10, lambda r: get_flag(r, "TechSupport", "No")),
        RiskFactor("no_online_security", 10, lambda r: get_flag(r, "OnlineSecurity", "No")),
        RiskFactor("fiber_optic", 10, lambda r: get_category(r, "InternetService") == "Fiber optic"),
        RiskFactor("electronic_check", 5, lambda r: get_category(r, "PaymentMethod") == "Electronic check"),
    ),
    floor=15.0,
    ceiling=95.0,
    high_above=70.0,
    medium_above=40.0,
)

ATTRITION_PROFILE = ScoringProfile(
    name="attrition",
    factors=(
        RiskFactor("overtime", 8, lambda r: get_flag(r, "OverTime", "Yes")),
        RiskFactor("new_joiner", 5, lambda r: get_number(r, "YearsAtCompany") < 2),
        RiskFactor("low_income", 4, lambda r: 0 < get_number(r, "MonthlyIncome") < 3000),
    ),
    floor=0.0,
    ceiling=100.0,
    high_above=25.0,
    medium_above=15.0,
    baseline_dimension="by_department",
)

PROFILES: Dict[str, ScoringProfile] = {p.name: p for p in (CHURN_PROFILE, ATTRITION_PROFILE)}
