"""Data access layer for branches and performance records"""

from typing import List, Optional
from sqlalchemy.orm import Session
from branchwatch.infrastructure.database.models import BranchRow, PerformanceRecordRow
from branchwatch.domain.models import AreaClass, Branch, BranchType, PerformanceRecord
from branchwatch.domain.exceptions import BranchNotFoundError, DuplicateRecordError, RecordNotFoundError
from branchwatch.utils.month_utils import normalize_month

BRANCH_FIELDS = ("name", "address", "lat", "lng", "branch_type", "opening_date")
RECORD_FIELDS = (
    "month",
    "sales",
    "rent_cost",
    "staff_count",
    "operating_hours",
    "complaints",
    "competitor_count",
    "nearby_establishments",
    "area_class",
)


def branch_to_domain(row: BranchRow) -> Branch:
    return Branch(
        id=row.id,
        name=row.name,
        address=row.address,
        lat=row.lat,
        lng=row.lng,
        branch_type=BranchType(row.branch_type),
        opening_date=row.opening_date,
    )


def record_to_domain(row: PerformanceRecordRow) -> PerformanceRecord:
    return PerformanceRecord(
        id=row.id,
        branch_id=row.branch_id,
        month=row.month,
        sales=row.sales,
        rent_cost=row.rent_cost,
        staff_count=row.staff_count,
        operating_hours=row.operating_hours,
        complaints=row.complaints,
        competitor_count=row.competitor_count,
        nearby_establishments=list(row.nearby_establishments or []),
        area_class=AreaClass(row.area_class),
    )


def _column_value(value):
    # Enums are stored by value
    return getattr(value, "value", value)


class BranchRepository:
    """Repository for branches"""

    def __init__(self, db: Session):
        self.db = db

    def create_branch(self, branch: Branch) -> Branch:
        """Persist a branch; the store assigns its id"""
        row = BranchRow(**{name: _column_value(getattr(branch, name)) for name in BRANCH_FIELDS})
        self.db.add(row)
        self.db.flush()  # Get ID without committing
        return branch_to_domain(row)

    def _get_row(self, branch_id: str) -> BranchRow:
        row = self.db.get(BranchRow, branch_id)
        if row is None:
            raise BranchNotFoundError(f"Branch {branch_id} not found")
        return row

    def get_branch(self, branch_id: str) -> Branch:
        return branch_to_domain(self._get_row(branch_id))

    def list_branches(self) -> List[Branch]:
        """All branches, newest first"""
        rows = (
            self.db.query(BranchRow)
            .order_by(BranchRow.created_at.desc(), BranchRow.name)
            .all()
        )
        return [branch_to_domain(r) for r in rows]

    def update_branch(self, branch_id: str, **changes) -> Branch:
        row = self._get_row(branch_id)
        for name, value in changes.items():
            if name in BRANCH_FIELDS:
                setattr(row, name, _column_value(value))
        self.db.flush()
        return branch_to_domain(row)

    def delete_branch(self, branch_id: str) -> None:
        """Delete a branch together with all of its performance records"""
        self.db.delete(self._get_row(branch_id))
        self.db.flush()


class PerformanceRecordRepository:
    """Repository for monthly performance records"""

    def __init__(self, db: Session):
        self.db = db

    def _ensure_month_free(self, branch_id: str, month: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(PerformanceRecordRow).filter(
            PerformanceRecordRow.branch_id == branch_id,
            PerformanceRecordRow.month == month,
        )
        if exclude_id is not None:
            query = query.filter(PerformanceRecordRow.id != exclude_id)
        if query.first() is not None:
            raise DuplicateRecordError(f"Branch {branch_id} already has a record for {month}")

    def create_record(self, record: PerformanceRecord) -> PerformanceRecord:
        """
        Persist a performance record.

        Raises:
            BranchNotFoundError: Owning branch does not exist
            DuplicateRecordError: Branch already has a record for that month
        """
        if self.db.get(BranchRow, record.branch_id) is None:
            raise BranchNotFoundError(f"Branch {record.branch_id} not found")

        month = normalize_month(record.month)
        self._ensure_month_free(record.branch_id, month)

        values = {name: _column_value(getattr(record, name)) for name in RECORD_FIELDS}
        values["month"] = month
        row = PerformanceRecordRow(branch_id=record.branch_id, **values)
        self.db.add(row)
        self.db.flush()
        return record_to_domain(row)

    def _get_row(self, record_id: str) -> PerformanceRecordRow:
        row = self.db.get(PerformanceRecordRow, record_id)
        if row is None:
            raise RecordNotFoundError(f"Performance record {record_id} not found")
        return row

    def get_record(self, record_id: str) -> PerformanceRecord:
        return record_to_domain(self._get_row(record_id))

    def update_record(self, record_id: str, **changes) -> PerformanceRecord:
        row = self._get_row(record_id)

        if "month" in changes:
            changes["month"] = normalize_month(changes["month"])
            self._ensure_month_free(row.branch_id, changes["month"], exclude_id=row.id)

        for name, value in changes.items():
            if name in RECORD_FIELDS:
                setattr(row, name, _column_value(value))
        self.db.flush()
        return record_to_domain(row)

    def delete_record(self, record_id: str) -> PerformanceRecord:
        row = self._get_row(record_id)
        deleted = record_to_domain(row)
        self.db.delete(row)
        self.db.flush()
        return deleted

    def get_records_by_branch(self, branch_id: str) -> List[PerformanceRecord]:
        """Fetch a branch's records, most recent month first"""
        rows = (
            self.db.query(PerformanceRecordRow)
            .filter(PerformanceRecordRow.branch_id == branch_id)
            .order_by(PerformanceRecordRow.month.desc())
            .all()
        )
        return [record_to_domain(r) for r in rows]

    def list_records(self) -> List[PerformanceRecord]:
        rows = self.db.query(PerformanceRecordRow).order_by(PerformanceRecordRow.month.desc()).all()
        return [record_to_domain(r) for r in rows]
