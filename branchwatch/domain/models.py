"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class BranchType(str, Enum):
    """Kind of location a branch operates in"""

    MALL = "mall"
    ROADSIDE = "roadside"
    CAMPUS = "campus"
    COMMERCIAL = "commercial"


class AreaClass(str, Enum):
    """Neighborhood surrounding a branch"""

    RESIDENTIAL = "residential"
    MIXED = "mixed"
    COMMERCIAL = "commercial"


class RiskLevel(str, Enum):
    """Categorical bucket derived from a risk score"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Branch:
    """Physical branch location"""

    id: str
    name: str
    address: str
    lat: float
    lng: float
    branch_type: BranchType
    opening_date: date


@dataclass
class PerformanceRecord:
    """One branch's operating metrics for one calendar month"""

    branch_id: str
    month: str  # "YYYY-MM"
    sales: float
    rent_cost: float
    staff_count: int = 1
    operating_hours: int = 8
    complaints: int = 0
    competitor_count: int = 0
    nearby_establishments: List[str] = field(default_factory=list)
    area_class: AreaClass = AreaClass.MIXED
    id: Optional[str] = None


@dataclass
class RiskFactor:
    """Single scoring rule that fired for a branch"""

    name: str
    points: int
    description: str


@dataclass
class RiskAssessment:
    """Output of risk scoring, computed on demand and never stored"""

    score: int
    level: RiskLevel
    factors: List[RiskFactor] = field(default_factory=list)


@dataclass
class SalesPoint:
    """Month/sales pair for trend charts"""

    month: str
    sales: float


@dataclass
class BranchTypeProfit:
    """Average latest-month profit for one branch type"""

    branch_type: BranchType
    avg_profit: float
    count: int  # branches of this type, with or without records


@dataclass
class RiskDistribution:
    """Number of branches per risk level"""

    low: int = 0
    medium: int = 0
    high: int = 0


@dataclass
class BranchRiskSnapshot:
    """Branch paired with its current risk, used by list and map views"""

    branch: Branch
    risk_score: int
    risk_level: RiskLevel
    latest_sales: float
    has_data: bool
