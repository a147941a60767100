"""Tests for the persistence layer against SQLite"""

import pytest
from sqlalchemy.orm import Session

from conftest import make_branch, make_record
from branchwatch.domain.exceptions import BranchNotFoundError, DuplicateRecordError, RecordNotFoundError
from branchwatch.domain.models import AreaClass, BranchType
from branchwatch.infrastructure.database.repositories import BranchRepository, PerformanceRecordRepository


def test_store_assigns_branch_id(db: Session):
    branch = BranchRepository(db).create_branch(make_branch("ignored", BranchType.CAMPUS))

    assert branch.id != "ignored"
    assert BranchRepository(db).get_branch(branch.id).branch_type == BranchType.CAMPUS


def test_record_round_trip(db: Session):
    branch = BranchRepository(db).create_branch(make_branch())
    repo = PerformanceRecordRepository(db)

    saved = repo.create_record(
        make_record("2026-1", branch_id=branch.id, nearby_establishments=["school", "dormitory"], area_class=AreaClass.RESIDENTIAL)
    )

    loaded = repo.get_record(saved.id)
    assert loaded.month == "2026-01"
    assert loaded.nearby_establishments == ["school", "dormitory"]
    assert loaded.area_class == AreaClass.RESIDENTIAL


def test_record_requires_existing_branch(db: Session):
    with pytest.raises(BranchNotFoundError):
        PerformanceRecordRepository(db).create_record(make_record("2026-01", branch_id="missing"))


def test_one_record_per_branch_and_month(db: Session):
    branch = BranchRepository(db).create_branch(make_branch())
    repo = PerformanceRecordRepository(db)
    repo.create_record(make_record("2026-01", branch_id=branch.id))

    with pytest.raises(DuplicateRecordError):
        repo.create_record(make_record("2026-1", branch_id=branch.id))


def test_update_record_keeps_its_own_month(db: Session):
    branch = BranchRepository(db).create_branch(make_branch())
    repo = PerformanceRecordRepository(db)
    record = repo.create_record(make_record("2026-01", branch_id=branch.id))

    updated = repo.update_record(record.id, month="2026-01", complaints=4)

    assert updated.complaints == 4


def test_delete_branch_cascades_to_records(db: Session):
    branches = BranchRepository(db)
    records = PerformanceRecordRepository(db)
    branch = branches.create_branch(make_branch())
    record = records.create_record(make_record("2026-01", branch_id=branch.id))
    db.commit()

    branches.delete_branch(branch.id)
    db.commit()

    with pytest.raises(RecordNotFoundError):
        records.get_record(record.id)
    assert records.list_records() == []
