"""Display labels for domain enums"""

from typing import Optional

from branchwatch.domain.models import AreaClass, BranchType, RiskLevel

NOT_APPLICABLE = "N/A"

_BRANCH_TYPE_LABELS = {
    BranchType.MALL: "Mall",
    BranchType.ROADSIDE: "Roadside",
    BranchType.CAMPUS: "Campus",
    BranchType.COMMERCIAL: "Commercial",
}

_AREA_CLASS_LABELS = {
    AreaClass.RESIDENTIAL: "Residential",
    AreaClass.MIXED: "Mixed Use",
    AreaClass.COMMERCIAL: "Commercial",
}

_RISK_LEVEL_LABELS = {
    RiskLevel.LOW: "🟢 Low Risk",
    RiskLevel.MEDIUM: "🟡 Medium Risk",
    RiskLevel.HIGH: "🔴 High Risk",
}

_RISK_COLORS = {
    RiskLevel.LOW: "#10b981",  # green
    RiskLevel.MEDIUM: "#f59e0b",  # orange
    RiskLevel.HIGH: "#ef4444",  # red
}


def branch_type_label(branch_type: BranchType) -> str:
    return _BRANCH_TYPE_LABELS[BranchType(branch_type)]


def best_branch_type_label(branch_type: Optional[BranchType]) -> str:
    """Label for best_branch_type output, "N/A" when there is no data"""
    if branch_type is None:
        return NOT_APPLICABLE
    return branch_type_label(branch_type)


def area_class_label(area_class: AreaClass) -> str:
    return _AREA_CLASS_LABELS[AreaClass(area_class)]


def risk_level_label(level: RiskLevel) -> str:
    return _RISK_LEVEL_LABELS[RiskLevel(level)]


def risk_color(level: RiskLevel) -> str:
    """Badge/marker color hex code for a risk level"""
    return _RISK_COLORS[RiskLevel(level)]
