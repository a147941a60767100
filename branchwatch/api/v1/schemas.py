"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from branchwatch.domain.models import AreaClass, BranchType, RiskLevel
from branchwatch.utils.month_utils import normalize_month


class BranchBase(BaseModel):
    name: str = Field(..., min_length=1, description="Branch name")
    address: str = Field(..., min_length=1, description="Street address")
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")
    branch_type: BranchType = BranchType.MALL
    opening_date: date

    @field_validator("name", "address")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class BranchCreate(BranchBase):
    """Request body for POST /v1/branches"""


class BranchUpdate(BranchBase):
    """Request body for PUT /v1/branches/{branch_id}"""


class BranchResponse(BranchBase):
    """Branch as returned by the API"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    branch_type_label: str = ""


class RecordBase(BaseModel):
    month: str = Field(..., description="Month in YYYY-MM form", examples=["2026-01"])
    sales: float = Field(..., ge=0)
    rent_cost: float = Field(..., ge=0)
    staff_count: int = Field(..., ge=1)
    operating_hours: int = Field(..., ge=1, le=24, description="Operating hours per day")
    complaints: int = Field(0, ge=0)
    competitor_count: int = Field(..., ge=0)
    nearby_establishments: List[str] = Field(default_factory=list)
    area_class: AreaClass = AreaClass.MIXED

    @field_validator("month")
    @classmethod
    def canonical_month(cls, value: str) -> str:
        return normalize_month(value)

    @field_validator("nearby_establishments")
    @classmethod
    def strip_tags(cls, value: List[str]) -> List[str]:
        return [tag.strip() for tag in value if tag.strip()]


class RecordCreate(RecordBase):
    """Request body for POST /v1/records"""

    branch_id: str = Field(..., min_length=1)


class RecordUpdate(RecordBase):
    """Request body for PUT /v1/records/{record_id}"""


class RecordResponse(RecordBase):
    """Performance record with its month's profit"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    branch_id: str
    profit: float
    area_class_label: str


class RiskFactorSchema(BaseModel):
    name: str
    points: int
    description: str


class RiskAssessmentSchema(BaseModel):
    score: int
    level: RiskLevel
    label: str
    color: str
    factors: List[RiskFactorSchema]


class SalesPointSchema(BaseModel):
    month: str
    sales: float


class LatestMetrics(BaseModel):
    month: str
    sales: float
    rent_cost: float
    profit: float
    rent_ratio: float
    sales_per_staff: float


class BranchSummaryResponse(BaseModel):
    """Response for GET /v1/branches/{branch_id}/summary"""

    branch: BranchResponse
    latest: Optional[LatestMetrics] = None
    risk: RiskAssessmentSchema
    sales_trend: List[SalesPointSchema]
    records: List[RecordResponse]


class BranchTypeProfitSchema(BaseModel):
    branch_type: BranchType
    label: str
    avg_profit: float
    count: int


class RiskDistributionSchema(BaseModel):
    low: int
    medium: int
    high: int


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    total_branches: int
    average_profit: float
    best_branch_type: Optional[BranchType] = None
    best_branch_type_label: str
    high_risk_count: int
    risk_distribution: RiskDistributionSchema
    profit_by_branch_type: List[BranchTypeProfitSchema]


class MapMarker(BaseModel):
    """Single branch pin for the map view"""

    branch_id: str
    name: str
    lat: float
    lng: float
    branch_type: BranchType
    branch_type_label: str
    risk_score: int
    risk_level: RiskLevel
    color: str
    latest_sales: float
    has_data: bool


class MapResponse(BaseModel):
    """Response for GET /v1/map"""

    center: Optional[List[float]] = None
    markers: List[MapMarker]


class DemoResponse(BaseModel):
    """Response for POST /v1/demo"""

    branches_created: int
    records_created: int
    message: str
