"""Demo portfolio used for presentations and smoke testing"""

from datetime import date
from typing import List, Tuple

from branchwatch.domain.models import AreaClass, Branch, BranchType, PerformanceRecord

DEMO_MONTHS = ("2025-11", "2025-12", "2026-01")


def _records(
    branch_id: str,
    rows: List[tuple],
    nearby: List[str],
    area_class: AreaClass,
    operating_hours: int,
) -> List[PerformanceRecord]:
    # rows: (sales, rent_cost, staff_count, complaints, competitor_count) per demo month
    return [
        PerformanceRecord(
            branch_id=branch_id,
            month=month,
            sales=sales,
            rent_cost=rent_cost,
            staff_count=staff,
            operating_hours=operating_hours,
            complaints=complaints,
            competitor_count=competitors,
            nearby_establishments=list(nearby),
            area_class=area_class,
        )
        for month, (sales, rent_cost, staff, complaints, competitors) in zip(DEMO_MONTHS, rows)
    ]


def demo_portfolio() -> List[Tuple[Branch, List[PerformanceRecord]]]:
    """
    Five Davao City branches with three months of data each.

    Profiles:
    - demo-sm: healthy mall branch, growing sales
    - demo-matina: moderate commercial branch, competition at threshold
    - demo-up: campus branch with a seasonal dip
    - demo-laurel: struggling roadside branch (falling sales, complaints, rent)
    - demo-abreeza: best performing mall branch

    Branch ids are placeholders; persistence assigns real ones.
    """
    sm = Branch(
        id="demo-sm",
        name="SM City Davao Branch",
        address="SM City Davao, Ecoland, Davao City",
        lat=7.0731,
        lng=125.6128,
        branch_type=BranchType.MALL,
        opening_date=date(2023, 1, 15),
    )
    matina = Branch(
        id="demo-matina",
        name="Matina Town Square Branch",
        address="Matina Town Square, Davao City",
        lat=7.0644,
        lng=125.6091,
        branch_type=BranchType.COMMERCIAL,
        opening_date=date(2023, 3, 20),
    )
    up = Branch(
        id="demo-up",
        name="UP Mindanao Branch",
        address="University of the Philippines Mindanao, Davao City",
        lat=7.0658,
        lng=125.5947,
        branch_type=BranchType.CAMPUS,
        opening_date=date(2023, 5, 10),
    )
    laurel = Branch(
        id="demo-laurel",
        name="J.P. Laurel Ave Branch",
        address="J.P. Laurel Avenue, Bajada, Davao City",
        lat=7.0744,
        lng=125.6091,
        branch_type=BranchType.ROADSIDE,
        opening_date=date(2023, 2, 1),
    )
    abreeza = Branch(
        id="demo-abreeza",
        name="Abreeza Mall Branch",
        address="Abreeza Mall, J.P. Laurel Ave, Davao City",
        lat=7.0719,
        lng=125.6161,
        branch_type=BranchType.MALL,
        opening_date=date(2023, 4, 15),
    )

    return [
        (
            sm,
            _records(
                sm.id,
                [(450000, 120000, 8, 3, 3), (520000, 120000, 8, 2, 3), (580000, 120000, 9, 1, 3)],
                ["mall", "office", "residential"],
                AreaClass.COMMERCIAL,
                12,
            ),
        ),
        (
            matina,
            _records(
                matina.id,
                [(280000, 85000, 6, 5, 4), (310000, 85000, 6, 4, 4), (295000, 85000, 6, 6, 5)],
                ["commercial", "residential"],
                AreaClass.MIXED,
                10,
            ),
        ),
        (
            up,
            _records(
                up.id,
                [(180000, 45000, 4, 2, 2), (95000, 45000, 4, 1, 2), (210000, 45000, 5, 3, 2)],
                ["school", "dormitory"],
                AreaClass.RESIDENTIAL,
                9,
            ),
        ),
        (
            laurel,
            _records(
                laurel.id,
                [(150000, 95000, 5, 12, 7), (135000, 95000, 5, 15, 8), (120000, 95000, 4, 18, 8)],
                ["office", "commercial"],
                AreaClass.COMMERCIAL,
                10,
            ),
        ),
        (
            abreeza,
            _records(
                abreeza.id,
                [(550000, 135000, 10, 2, 2), (620000, 135000, 10, 1, 2), (680000, 135000, 11, 1, 2)],
                ["mall", "office", "hotel"],
                AreaClass.COMMERCIAL,
                12,
            ),
        ),
    ]
