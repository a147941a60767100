"""Risk scoring engine - core business logic for branch risk assessment"""

from typing import Callable, Iterable, List, Optional, Sequence

from branchwatch.domain.analytics import (
    group_records_by_branch,
    latest_record,
    profit,
    rent_ratio,
    sales_decreasing,
    sort_by_month,
)
from branchwatch.domain.models import (
    Branch,
    BranchRiskSnapshot,
    BranchType,
    PerformanceRecord,
    RiskAssessment,
    RiskDistribution,
    RiskFactor,
    RiskLevel,
)

CURRENCY_SYMBOL = "₱"

# Rule points. The maxima add up to exactly 100.
NEGATIVE_PROFIT_POINTS = 35
HIGH_RENT_POINTS = 20
HIGH_COMPETITION_POINTS = 15
HIGH_COMPLAINTS_POINTS = 10
DECLINING_SALES_POINTS = 20

RENT_RATIO_THRESHOLD = 0.35
COMPETITOR_THRESHOLD = 5
COMPLAINTS_THRESHOLD = 10
TREND_WINDOW = 3

HIGH_RISK_MIN_SCORE = 67
MEDIUM_RISK_MIN_SCORE = 34

MIN_SCORE = 0
MAX_SCORE = 100

Rule = Callable[[PerformanceRecord, Sequence[PerformanceRecord]], Optional[RiskFactor]]


def _money(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def _negative_profit(latest: PerformanceRecord, history: Sequence[PerformanceRecord]) -> Optional[RiskFactor]:
    value = profit(latest.sales, latest.rent_cost)
    if value >= 0:
        return None
    return RiskFactor(
        name="Negative Profit",
        points=NEGATIVE_PROFIT_POINTS,
        description=f"Losing {_money(abs(value))} per month",
    )


def _high_rent_ratio(latest: PerformanceRecord, history: Sequence[PerformanceRecord]) -> Optional[RiskFactor]:
    ratio = rent_ratio(latest.sales, latest.rent_cost)
    if ratio <= RENT_RATIO_THRESHOLD:
        return None
    return RiskFactor(
        name="High Rent Ratio",
        points=HIGH_RENT_POINTS,
        description=f"Rent is {ratio * 100:.1f}% of sales (threshold: {RENT_RATIO_THRESHOLD:.0%})",
    )


def _high_competition(latest: PerformanceRecord, history: Sequence[PerformanceRecord]) -> Optional[RiskFactor]:
    competitors = latest.competitor_count or 0
    if competitors < COMPETITOR_THRESHOLD:
        return None
    return RiskFactor(
        name="High Competition",
        points=HIGH_COMPETITION_POINTS,
        description=f"{competitors} competitors nearby",
    )


def _high_complaints(latest: PerformanceRecord, history: Sequence[PerformanceRecord]) -> Optional[RiskFactor]:
    complaints = latest.complaints or 0
    if complaints < COMPLAINTS_THRESHOLD:
        return None
    return RiskFactor(
        name="High Complaints",
        points=HIGH_COMPLAINTS_POINTS,
        description=f"{complaints} customer complaints this month",
    )


def _declining_sales(latest: PerformanceRecord, history: Sequence[PerformanceRecord]) -> Optional[RiskFactor]:
    if len(history) < TREND_WINDOW or not sales_decreasing(history):
        return None
    oldest_first = reversed(sort_by_month(history, descending=True)[:TREND_WINDOW])
    figures = " → ".join(_money(r.sales or 0) for r in oldest_first)
    return RiskFactor(
        name="Declining Sales",
        points=DECLINING_SALES_POINTS,
        description=f"Sales decreased for {TREND_WINDOW} consecutive months ({figures})",
    )


# Evaluation order is also the display order of the factor breakdown
RULES: List[Rule] = [
    _negative_profit,
    _high_rent_ratio,
    _high_competition,
    _high_complaints,
    _declining_sales,
]


def risk_factors(
    latest: Optional[PerformanceRecord],
    history: Optional[Sequence[PerformanceRecord]] = None,
) -> List[RiskFactor]:
    """
    Evaluate every rule against the latest record and return those that fired.

    The list is always in rule order, regardless of which subset fires.
    The trend rule uses the full history; all others only the latest record.
    """
    if latest is None:
        return []

    history = list(history or [])
    factors = []
    for rule in RULES:
        factor = rule(latest, history)
        if factor is not None:
            factors.append(factor)
    return factors


def clamp_score(raw_score: int) -> int:
    return min(max(raw_score, MIN_SCORE), MAX_SCORE)


def calculate_risk_score(
    latest: Optional[PerformanceRecord],
    history: Optional[Sequence[PerformanceRecord]] = None,
) -> int:
    """
    Calculate risk score from 0 (no risk signals) to 100.

    Scoring rules (additive, all evaluated):
    - Profit < 0:                    +35
    - Rent ratio > 0.35:             +20
    - Competitor count >= 5:         +15
    - Complaints >= 10:              +10
    - Sales down 3 months in a row:  +20

    A missing latest record means "no data yet" and scores 0.
    """
    return clamp_score(sum(f.points for f in risk_factors(latest, history)))


def risk_level(score: int) -> RiskLevel:
    """
    Map score to risk level.

    Bands (lower bound inclusive):
    - 67 - 100: high
    - 34 - 66:  medium
    - 0 - 33:   low
    """
    if score >= HIGH_RISK_MIN_SCORE:
        return RiskLevel.HIGH
    elif score >= MEDIUM_RISK_MIN_SCORE:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def assess_risk(
    latest: Optional[PerformanceRecord],
    history: Optional[Sequence[PerformanceRecord]] = None,
) -> RiskAssessment:
    """
    Main entry point: score a branch from its latest record and history.

    Returns complete RiskAssessment with score, level, and fired factors.
    """
    factors = risk_factors(latest, history)
    score = clamp_score(sum(f.points for f in factors))
    return RiskAssessment(score=score, level=risk_level(score), factors=factors)


def assess_branch(records: Sequence[PerformanceRecord]) -> RiskAssessment:
    """Assess a branch from all of its records"""
    return assess_risk(latest_record(records), records)


def branch_risk_snapshot(branch: Branch, records: Sequence[PerformanceRecord]) -> BranchRiskSnapshot:
    """Current risk for one branch; branches without records report low risk"""
    latest = latest_record(records)
    if latest is None:
        return BranchRiskSnapshot(
            branch=branch,
            risk_score=0,
            risk_level=RiskLevel.LOW,
            latest_sales=0.0,
            has_data=False,
        )

    score = calculate_risk_score(latest, records)
    return BranchRiskSnapshot(
        branch=branch,
        risk_score=score,
        risk_level=risk_level(score),
        latest_sales=latest.sales or 0,
        has_data=True,
    )


def branch_risk_snapshots(
    branches: Sequence[Branch],
    all_records: Iterable[PerformanceRecord],
) -> List[BranchRiskSnapshot]:
    grouped = group_records_by_branch(all_records)
    return [branch_risk_snapshot(b, grouped.get(b.id, [])) for b in branches]


def filter_snapshots(
    snapshots: Iterable[BranchRiskSnapshot],
    branch_type: Optional[BranchType] = None,
    level: Optional[RiskLevel] = None,
) -> List[BranchRiskSnapshot]:
    """Keep snapshots matching the given branch type and/or risk level"""
    return [
        s
        for s in snapshots
        if (branch_type is None or s.branch.branch_type == branch_type)
        and (level is None or s.risk_level == level)
    ]


def risk_distribution(
    branches: Sequence[Branch],
    all_records: Iterable[PerformanceRecord],
) -> RiskDistribution:
    """Count branches per risk level; branches without records are not counted"""
    distribution = RiskDistribution()

    for snapshot in branch_risk_snapshots(branches, all_records):
        if not snapshot.has_data:
            continue
        current = getattr(distribution, snapshot.risk_level.value)
        setattr(distribution, snapshot.risk_level.value, current + 1)

    return distribution


def high_risk_count(branches: Sequence[Branch], all_records: Iterable[PerformanceRecord]) -> int:
    return risk_distribution(branches, all_records).high
