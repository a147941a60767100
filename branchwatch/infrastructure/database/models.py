"""SQLAlchemy ORM models for branches and their monthly performance"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Date, Integer, ForeignKey, Text, JSON, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class BranchRow(Base):
    """Physical branch location"""

    __tablename__ = "branch"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    branch_type = Column(String(16), nullable=False, index=True)
    opening_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    records = relationship(
        "PerformanceRecordRow",
        back_populates="branch",
        cascade="all, delete-orphan",
    )


class PerformanceRecordRow(Base):
    """One month of operating metrics for a branch"""

    __tablename__ = "performance_record"
    __table_args__ = (UniqueConstraint("branch_id", "month", name="uq_performance_record_branch_month"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    branch_id = Column(String(36), ForeignKey("branch.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(String(7), nullable=False)  # YYYY-MM
    sales = Column(Float, nullable=False)
    rent_cost = Column(Float, nullable=False)
    staff_count = Column(Integer, nullable=False)
    operating_hours = Column(Integer, nullable=False)
    complaints = Column(Integer, nullable=False, default=0)
    competitor_count = Column(Integer, nullable=False, default=0)
    nearby_establishments = Column(JSON, nullable=False, default=list)
    area_class = Column(String(16), nullable=False, default="mixed")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    branch = relationship("BranchRow", back_populates="records")
