"""Conversion of domain results into API schemas"""

from typing import List

from branchwatch.api.v1.schemas import (
    BranchResponse,
    MapMarker,
    RecordResponse,
    RiskAssessmentSchema,
    RiskFactorSchema,
)
from branchwatch.domain.analytics import profit
from branchwatch.domain.labels import area_class_label, branch_type_label, risk_color, risk_level_label
from branchwatch.domain.models import Branch, BranchRiskSnapshot, PerformanceRecord, RiskAssessment


def branch_response(branch: Branch) -> BranchResponse:
    return BranchResponse(
        id=branch.id,
        name=branch.name,
        address=branch.address,
        lat=branch.lat,
        lng=branch.lng,
        branch_type=branch.branch_type,
        opening_date=branch.opening_date,
        branch_type_label=branch_type_label(branch.branch_type),
    )


def record_response(record: PerformanceRecord) -> RecordResponse:
    return RecordResponse(
        id=record.id,
        branch_id=record.branch_id,
        month=record.month,
        sales=record.sales,
        rent_cost=record.rent_cost,
        staff_count=record.staff_count,
        operating_hours=record.operating_hours,
        complaints=record.complaints,
        competitor_count=record.competitor_count,
        nearby_establishments=record.nearby_establishments,
        area_class=record.area_class,
        profit=profit(record.sales, record.rent_cost),
        area_class_label=area_class_label(record.area_class),
    )


def assessment_schema(assessment: RiskAssessment) -> RiskAssessmentSchema:
    return RiskAssessmentSchema(
        score=assessment.score,
        level=assessment.level,
        label=risk_level_label(assessment.level),
        color=risk_color(assessment.level),
        factors=[
            RiskFactorSchema(name=f.name, points=f.points, description=f.description)
            for f in assessment.factors
        ],
    )


def map_markers(snapshots: List[BranchRiskSnapshot]) -> List[MapMarker]:
    return [
        MapMarker(
            branch_id=s.branch.id,
            name=s.branch.name,
            lat=s.branch.lat,
            lng=s.branch.lng,
            branch_type=s.branch.branch_type,
            branch_type_label=branch_type_label(s.branch.branch_type),
            risk_score=s.risk_score,
            risk_level=s.risk_level,
            color=risk_color(s.risk_level),
            latest_sales=s.latest_sales,
            has_data=s.has_data,
        )
        for s in snapshots
    ]
