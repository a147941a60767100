"""POST /v1/demo - Seed the demo branch portfolio"""

import logging
from dataclasses import replace
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from branchwatch.api.v1.schemas import DemoResponse
from branchwatch.infrastructure.database.session import get_db
from branchwatch.infrastructure.database.repositories import BranchRepository, PerformanceRecordRepository
from branchwatch.domain.demo import demo_portfolio

router = APIRouter()


@router.post("/demo", response_model=DemoResponse, status_code=201)
def seed_demo_data(db: Session = Depends(get_db)):
    """Add 5 demo branches with 3 months of performance data each"""
    branch_repo = BranchRepository(db)
    record_repo = PerformanceRecordRepository(db)

    records_created = 0
    portfolio = demo_portfolio()
    for template_branch, template_records in portfolio:
        branch = branch_repo.create_branch(template_branch)
        for template in template_records:
            record_repo.create_record(
                replace(template, branch_id=branch.id, id=None)
            )
            records_created += 1

    db.commit()
    logging.info("Demo data seeded", extra={"branches": len(portfolio), "records": records_created})

    return DemoResponse(
        branches_created=len(portfolio),
        records_created=records_created,
        message=f"Added {len(portfolio)} demo branches with performance data",
    )
