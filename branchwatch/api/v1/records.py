"""Performance record endpoints - every write re-scores the owning branch"""

import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from branchwatch.api.v1.schemas import RecordCreate, RecordResponse, RecordUpdate
from branchwatch.api.v1.presenters import record_response
from branchwatch.api.dependencies import get_request_id, get_risk_webhook_client
from branchwatch.infrastructure.database.session import get_db
from branchwatch.infrastructure.database.repositories import PerformanceRecordRepository
from branchwatch.infrastructure.clients.risk_webhook import RiskWebhookClient
from branchwatch.domain.exceptions import BranchNotFoundError, DuplicateRecordError, RecordNotFoundError
from branchwatch.domain.models import PerformanceRecord, RiskAssessment
from branchwatch.domain.scoring import assess_branch
from branchwatch.infrastructure.observability.metrics import record_write
from branchwatch.infrastructure.observability.logging import log_record_change

router = APIRouter()


def _assess(repo: PerformanceRecordRepository, branch_id: str) -> RiskAssessment:
    return assess_branch(repo.get_records_by_branch(branch_id))


def _after_write(
    operation: str,
    branch_id: str,
    before: RiskAssessment,
    repo: PerformanceRecordRepository,
    request: Request,
    background_tasks: BackgroundTasks,
    webhook_client: RiskWebhookClient,
) -> None:
    """Re-score the branch and notify subscribers if its risk level moved"""
    after = _assess(repo, branch_id)

    record_write(operation, before.level.value, after.level.value)
    log_record_change(get_request_id(request), branch_id, operation, before.level.value, after.level.value)

    if after.level != before.level:
        background_tasks.add_task(
            webhook_client.send_risk_change_event,
            {
                "event": "BRANCH_RISK_CHANGED",
                "branch_id": branch_id,
                "previous_level": before.level.value,
                "risk_level": after.level.value,
                "risk_score": after.score,
                "factors": [f.name for f in after.factors],
            },
        )


@router.post("/records", response_model=RecordResponse, status_code=201)
def create_record(
    request_body: RecordCreate,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    webhook_client: RiskWebhookClient = Depends(get_risk_webhook_client),
):
    """
    Record a branch's metrics for one month.

    Flow:
    1. Score the branch from its current records
    2. Persist the new record (one per branch and month)
    3. Re-score and schedule a webhook if the risk level changed
    """
    repo = PerformanceRecordRepository(db)

    try:
        before = _assess(repo, request_body.branch_id)
        record = repo.create_record(PerformanceRecord(**request_body.model_dump()))
        _after_write("created", record.branch_id, before, repo, request, background_tasks, webhook_client)
        db.commit()
        return record_response(record)

    except BranchNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except DuplicateRecordError as e:
        db.rollback()
        logging.warning(f"Duplicate record: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/records/{record_id}", response_model=RecordResponse)
def get_record(record_id: str, db: Session = Depends(get_db)):
    try:
        return record_response(PerformanceRecordRepository(db).get_record(record_id))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Performance record not found")


@router.put("/records/{record_id}", response_model=RecordResponse)
def update_record(
    record_id: str,
    request_body: RecordUpdate,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    webhook_client: RiskWebhookClient = Depends(get_risk_webhook_client),
):
    repo = PerformanceRecordRepository(db)

    try:
        branch_id = repo.get_record(record_id).branch_id
        before = _assess(repo, branch_id)
        record = repo.update_record(record_id, **request_body.model_dump())
        _after_write("updated", branch_id, before, repo, request, background_tasks, webhook_client)
        db.commit()
        return record_response(record)

    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Performance record not found")

    except DuplicateRecordError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/records/{record_id}", status_code=204)
def delete_record(
    record_id: str,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    webhook_client: RiskWebhookClient = Depends(get_risk_webhook_client),
):
    repo = PerformanceRecordRepository(db)

    try:
        branch_id = repo.get_record(record_id).branch_id
        before = _assess(repo, branch_id)
        repo.delete_record(record_id)
        _after_write("deleted", branch_id, before, repo, request, background_tasks, webhook_client)
        db.commit()
        return Response(status_code=204)

    except RecordNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Performance record not found")
