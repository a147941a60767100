"""Portfolio-wide views: dashboard headline numbers and map markers"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from branchwatch.api.v1.schemas import (
    BranchTypeProfitSchema,
    DashboardResponse,
    MapResponse,
    RiskDistributionSchema,
)
from branchwatch.api.v1.presenters import map_markers
from branchwatch.config import settings
from branchwatch.infrastructure.database.session import get_db
from branchwatch.infrastructure.database.repositories import BranchRepository, PerformanceRecordRepository
from branchwatch.domain.analytics import average_profit, best_branch_type, profit_by_branch_type
from branchwatch.domain.labels import best_branch_type_label, branch_type_label
from branchwatch.domain.models import BranchType, RiskLevel
from branchwatch.domain.scoring import branch_risk_snapshots, filter_snapshots, risk_distribution

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db)):
    """
    Headline numbers across all branches.

    Average profit and the per-type breakdown only count branches that
    have at least one performance record.
    """
    branches = BranchRepository(db).list_branches()
    records = PerformanceRecordRepository(db).list_records()

    distribution = risk_distribution(branches, records)
    best = best_branch_type(branches, records)

    return DashboardResponse(
        total_branches=len(branches),
        average_profit=average_profit(branches, records),
        best_branch_type=best,
        best_branch_type_label=best_branch_type_label(best),
        high_risk_count=distribution.high,
        risk_distribution=RiskDistributionSchema(
            low=distribution.low,
            medium=distribution.medium,
            high=distribution.high,
        ),
        profit_by_branch_type=[
            BranchTypeProfitSchema(
                branch_type=item.branch_type,
                label=branch_type_label(item.branch_type),
                avg_profit=round(item.avg_profit),
                count=item.count,
            )
            for item in profit_by_branch_type(branches, records)
        ],
    )


@router.get("/map", response_model=MapResponse)
def get_map(
    branch_type: Optional[BranchType] = Query(None, description="Only show this branch type"),
    risk_level: Optional[RiskLevel] = Query(None, description="Only show this risk level"),
    db: Session = Depends(get_db),
):
    """Branch markers colored by current risk level"""
    branches = BranchRepository(db).list_branches()
    records = PerformanceRecordRepository(db).list_records()

    snapshots = filter_snapshots(branch_risk_snapshots(branches, records), branch_type, risk_level)

    return MapResponse(
        center=[settings.map_center_lat, settings.map_center_lng],
        markers=map_markers(snapshots),
    )
