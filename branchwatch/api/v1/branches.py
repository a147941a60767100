"""Branch CRUD endpoints and per-branch performance summary"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from branchwatch.api.v1.schemas import (
    BranchCreate,
    BranchResponse,
    BranchSummaryResponse,
    BranchUpdate,
    LatestMetrics,
    RecordResponse,
    SalesPointSchema,
)
from branchwatch.api.v1.presenters import assessment_schema, branch_response, record_response
from branchwatch.api.dependencies import get_request_id
from branchwatch.infrastructure.database.session import get_db
from branchwatch.infrastructure.database.repositories import BranchRepository, PerformanceRecordRepository
from branchwatch.domain.analytics import filter_branches, latest_record, profit, rent_ratio, sales_per_staff, sales_trend
from branchwatch.domain.exceptions import BranchNotFoundError
from branchwatch.domain.models import Branch, BranchType
from branchwatch.domain.scoring import assess_risk
from branchwatch.infrastructure.observability.metrics import record_assessment
from branchwatch.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/branches", response_model=BranchResponse, status_code=201)
def create_branch(request_body: BranchCreate, db: Session = Depends(get_db)):
    """Register a new branch"""
    branch = BranchRepository(db).create_branch(
        Branch(id="", **request_body.model_dump())
    )
    db.commit()
    logging.info("Branch created", extra={"branch_id": branch.id})
    return branch_response(branch)


@router.get("/branches", response_model=List[BranchResponse])
def list_branches(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or address"),
    branch_type: Optional[BranchType] = Query(None, description="Only list this branch type"),
    db: Session = Depends(get_db),
):
    branches = filter_branches(BranchRepository(db).list_branches(), search, branch_type)
    return [branch_response(b) for b in branches]


@router.get("/branches/{branch_id}", response_model=BranchResponse)
def get_branch(branch_id: str, db: Session = Depends(get_db)):
    try:
        return branch_response(BranchRepository(db).get_branch(branch_id))
    except BranchNotFoundError:
        raise HTTPException(status_code=404, detail="Branch not found")


@router.put("/branches/{branch_id}", response_model=BranchResponse)
def update_branch(branch_id: str, request_body: BranchUpdate, db: Session = Depends(get_db)):
    try:
        branch = BranchRepository(db).update_branch(branch_id, **request_body.model_dump())
    except BranchNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Branch not found")

    db.commit()
    return branch_response(branch)


@router.delete("/branches/{branch_id}", status_code=204)
def delete_branch(branch_id: str, db: Session = Depends(get_db)):
    """Delete a branch and all of its performance records"""
    try:
        BranchRepository(db).delete_branch(branch_id)
    except BranchNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Branch not found")

    db.commit()
    logging.info("Branch deleted", extra={"branch_id": branch_id})
    return Response(status_code=204)


@router.get("/branches/{branch_id}/records", response_model=List[RecordResponse])
def list_branch_records(branch_id: str, db: Session = Depends(get_db)):
    """Performance records for a branch, most recent month first"""
    try:
        BranchRepository(db).get_branch(branch_id)
    except BranchNotFoundError:
        raise HTTPException(status_code=404, detail="Branch not found")

    records = PerformanceRecordRepository(db).get_records_by_branch(branch_id)
    return [record_response(r) for r in records]


@router.get("/branches/{branch_id}/summary", response_model=BranchSummaryResponse)
def get_branch_summary(branch_id: str, request: Request, db: Session = Depends(get_db)):
    """
    Branch detail view.

    Returns:
        Latest month metrics, risk assessment with factor breakdown,
        chronological sales trend, and the record table
    """
    try:
        branch = BranchRepository(db).get_branch(branch_id)
    except BranchNotFoundError:
        raise HTTPException(status_code=404, detail="Branch not found")

    records = PerformanceRecordRepository(db).get_records_by_branch(branch_id)
    latest = latest_record(records)
    assessment = assess_risk(latest, records)

    record_assessment(assessment.level.value)
    log_assessment(
        get_request_id(request),
        branch_id,
        assessment.score,
        assessment.level.value,
        len(assessment.factors),
    )

    latest_metrics = None
    if latest is not None:
        latest_metrics = LatestMetrics(
            month=latest.month,
            sales=latest.sales,
            rent_cost=latest.rent_cost,
            profit=profit(latest.sales, latest.rent_cost),
            rent_ratio=rent_ratio(latest.sales, latest.rent_cost),
            sales_per_staff=sales_per_staff(latest.sales, latest.staff_count),
        )

    return BranchSummaryResponse(
        branch=branch_response(branch),
        latest=latest_metrics,
        risk=assessment_schema(assessment),
        sales_trend=[SalesPointSchema(month=p.month, sales=p.sales) for p in sales_trend(records)],
        records=[record_response(r) for r in records],
    )
