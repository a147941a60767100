"""Unit tests for aggregate analytics"""

import math

from conftest import make_branch, make_record
from branchwatch.domain.analytics import (
    average_profit,
    best_branch_type,
    filter_branches,
    group_records_by_branch,
    latest_record,
    profit,
    profit_by_branch_type,
    rent_ratio,
    sales_decreasing,
    sales_per_staff,
    sales_trend,
)
from branchwatch.domain.models import BranchType, SalesPoint


def test_profit_is_sales_minus_rent():
    assert profit(150000, 95000) == 55000
    assert profit(50000, 60000) == -10000  # negative when rent exceeds sales


def test_profit_treats_missing_values_as_zero():
    assert profit(None, 10000) == -10000
    assert profit(25000, None) == 25000
    assert profit(None, None) == 0


def test_rent_ratio():
    assert rent_ratio(200000, 50000) == 0.25


def test_rent_ratio_floors_sales_at_one():
    """Zero or negative sales never divide by zero"""
    assert rent_ratio(0, 5000) == 5000
    assert rent_ratio(-100, 5000) == 5000
    assert rent_ratio(None, 0) == 0
    assert math.isfinite(rent_ratio(0, 1e9))


def test_sales_per_staff_floors_headcount_at_one():
    assert sales_per_staff(100000, 4) == 25000
    assert sales_per_staff(100000, 0) == 100000
    assert sales_per_staff(None, 3) == 0


def test_latest_record_empty():
    assert latest_record([]) is None


def test_latest_record_ignores_input_order():
    records = [make_record("2025-12"), make_record("2026-01"), make_record("2025-11")]
    assert latest_record(records).month == "2026-01"


def test_latest_record_duplicate_month_picks_first_in_input_order():
    first = make_record("2026-01", sales=1)
    second = make_record("2026-01", sales=2)

    assert latest_record([make_record("2025-12"), first, second]) is first


def test_latest_record_orders_months_chronologically_not_lexically():
    # "2025-9" > "2025-10" as strings, but October is later
    records = [make_record("2025-9"), make_record("2025-10")]
    assert latest_record(records).month == "2025-10"


def test_sales_decreasing_needs_three_records():
    assert sales_decreasing([]) is False
    assert sales_decreasing([make_record("2026-01", sales=80), make_record("2025-12", sales=90)]) is False


def test_sales_decreasing_true_when_most_recent_is_smallest():
    # Most recent first: 80 < 90 < 100
    records = [
        make_record("2026-01", sales=80),
        make_record("2025-12", sales=90),
        make_record("2025-11", sales=100),
    ]
    assert sales_decreasing(records) is True


def test_sales_decreasing_false_for_non_monotonic_history():
    # Most recent first: 100, 90, 95
    records = [
        make_record("2026-01", sales=100),
        make_record("2025-12", sales=90),
        make_record("2025-11", sales=95),
    ]
    assert sales_decreasing(records) is False


def test_sales_decreasing_false_when_sales_are_growing():
    # Most recent first: 100, 90, 80 (sales went up month over month)
    records = [
        make_record("2026-01", sales=100),
        make_record("2025-12", sales=90),
        make_record("2025-11", sales=80),
    ]
    assert sales_decreasing(records) is False


def test_sales_decreasing_requires_strict_drop():
    records = [
        make_record("2026-01", sales=90),
        make_record("2025-12", sales=90),
        make_record("2025-11", sales=100),
    ]
    assert sales_decreasing(records) is False


def test_sales_decreasing_duplicate_month_first_in_input_order_is_most_recent():
    records = [
        make_record("2026-01", sales=80),
        make_record("2026-01", sales=90),
        make_record("2025-12", sales=100),
    ]
    # Most recent first: 80, 90, 100
    assert sales_decreasing(records) is True

    records[0], records[1] = records[1], records[0]
    # Most recent first: 90, 80, 100
    assert sales_decreasing(records) is False

    duplicates = [
        make_record("2026-01", sales=80),
        make_record("2026-01", sales=85),
        make_record("2026-01", sales=90),
    ]
    assert sales_decreasing(duplicates) is True
    assert sales_decreasing(list(reversed(duplicates))) is False


def test_sales_decreasing_only_looks_at_last_three_months():
    records = [
        make_record("2025-08", sales=10),  # older months are ignored
        make_record("2025-11", sales=100),
        make_record("2026-01", sales=80),
        make_record("2025-12", sales=90),
    ]
    assert sales_decreasing(records) is True


def test_group_records_by_branch_keeps_input_order():
    a1, b1, a2 = make_record("2025-12", branch_id="a"), make_record("2025-12", branch_id="b"), make_record("2025-11", branch_id="a")

    grouped = group_records_by_branch([a1, b1, a2])

    assert grouped["a"] == [a1, a2]
    assert grouped["b"] == [b1]


def test_average_profit_excludes_branches_without_records():
    branches = [make_branch("a"), make_branch("b"), make_branch("c")]
    records = [
        make_record("2026-01", sales=30000, rent_cost=20000, branch_id="a"),  # +10000
        make_record("2026-01", sales=15000, rent_cost=20000, branch_id="b"),  # -5000
    ]

    assert average_profit(branches, records) == 2500


def test_average_profit_uses_latest_month_only():
    branches = [make_branch("a")]
    records = [
        make_record("2025-12", sales=1000000, rent_cost=0, branch_id="a"),
        make_record("2026-01", sales=50000, rent_cost=20000, branch_id="a"),
    ]

    assert average_profit(branches, records) == 30000


def test_average_profit_empty_inputs():
    assert average_profit([], []) == 0
    assert average_profit([make_branch("a")], []) == 0


def test_profit_by_branch_type_omits_types_without_branches():
    branches = [
        make_branch("c1", BranchType.CAMPUS),
        make_branch("m1", BranchType.MALL),
        make_branch("m2", BranchType.MALL),
    ]
    records = [
        make_record("2026-01", sales=100000, rent_cost=40000, branch_id="m1"),
        make_record("2026-01", sales=80000, rent_cost=40000, branch_id="m2"),
        make_record("2026-01", sales=50000, rent_cost=10000, branch_id="c1"),
    ]

    result = profit_by_branch_type(branches, records)

    # Fixed order: mall, roadside, campus, commercial
    assert [r.branch_type for r in result] == [BranchType.MALL, BranchType.CAMPUS]
    assert result[0].avg_profit == 50000
    assert result[0].count == 2
    assert result[1].avg_profit == 40000
    assert result[1].count == 1


def test_profit_by_branch_type_counts_branches_without_records():
    branches = [make_branch("m1", BranchType.MALL), make_branch("m2", BranchType.MALL)]
    records = [make_record("2026-01", sales=60000, rent_cost=20000, branch_id="m1")]

    (mall,) = profit_by_branch_type(branches, records)

    assert mall.avg_profit == 40000  # m2 is not averaged in as zero
    assert mall.count == 2


def test_profit_by_branch_type_without_any_records():
    (roadside,) = profit_by_branch_type([make_branch("r1", BranchType.ROADSIDE)], [])

    assert roadside.avg_profit == 0
    assert roadside.count == 1


def test_best_branch_type_not_applicable_on_empty_input():
    assert best_branch_type([], []) is None


def test_best_branch_type_picks_highest_average():
    branches = [make_branch("m1", BranchType.MALL), make_branch("k1", BranchType.COMMERCIAL)]
    records = [
        make_record("2026-01", sales=100000, rent_cost=90000, branch_id="m1"),
        make_record("2026-01", sales=100000, rent_cost=10000, branch_id="k1"),
    ]

    assert best_branch_type(branches, records) == BranchType.COMMERCIAL


def test_best_branch_type_tie_goes_to_earlier_type():
    branches = [make_branch("k1", BranchType.COMMERCIAL), make_branch("r1", BranchType.ROADSIDE)]
    records = [
        make_record("2026-01", sales=100000, rent_cost=50000, branch_id="k1"),
        make_record("2026-01", sales=100000, rent_cost=50000, branch_id="r1"),
    ]

    assert best_branch_type(branches, records) == BranchType.ROADSIDE


def test_sales_trend_is_chronological():
    records = [
        make_record("2026-01", sales=300),
        make_record("2025-11", sales=100),
        make_record("2025-12", sales=200),
    ]

    assert sales_trend(records) == [
        SalesPoint("2025-11", 100),
        SalesPoint("2025-12", 200),
        SalesPoint("2026-01", 300),
    ]


def test_sales_trend_empty_and_repeatable():
    assert sales_trend([]) == []

    records = [make_record("2025-12"), make_record("2025-11")]
    assert sales_trend(records) == sales_trend(records)


def test_malformed_month_never_raises_and_is_never_latest():
    bad = make_record("2026/02", sales=1)
    good = make_record("2025-12", sales=200)

    assert latest_record([bad, good]) is good
    assert [p.month for p in sales_trend([good, bad])] == ["2026/02", "2025-12"]
    assert sales_decreasing([bad, good, make_record("2025-11", sales=300)]) is False


def _branches():
    return [
        make_branch("sm", BranchType.MALL, name="SM City", address="J.P. Laurel Ave, Bajada"),
        make_branch("la", BranchType.ROADSIDE, name="Laurel Ave", address="Lanang, Davao City"),
        make_branch("uc", BranchType.CAMPUS, name="UM Matina", address="Matina, Davao City"),
    ]


def test_filter_branches_without_criteria_returns_all():
    assert [b.id for b in filter_branches(_branches())] == ["sm", "la", "uc"]
    assert [b.id for b in filter_branches(_branches(), search="  ")] == ["sm", "la", "uc"]


def test_filter_branches_search_matches_name_or_address():
    assert [b.id for b in filter_branches(_branches(), search="matina")] == ["uc"]
    assert [b.id for b in filter_branches(_branches(), search="Lanang")] == ["la"]
    # name of one branch, address of another
    assert [b.id for b in filter_branches(_branches(), search="laurel")] == ["sm", "la"]


def test_filter_branches_search_is_case_insensitive():
    assert [b.id for b in filter_branches(_branches(), search="SM CITY")] == ["sm"]


def test_filter_branches_by_type():
    assert [b.id for b in filter_branches(_branches(), branch_type=BranchType.ROADSIDE)] == ["la"]
    assert filter_branches(_branches(), branch_type=BranchType.COMMERCIAL) == []


def test_filter_branches_combines_search_and_type():
    result = filter_branches(_branches(), search="laurel", branch_type=BranchType.MALL)
    assert [b.id for b in result] == ["sm"]
