"""Aggregate analytics over branch performance records"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from branchwatch.domain.models import (
    Branch,
    BranchType,
    BranchTypeProfit,
    PerformanceRecord,
    SalesPoint,
)
from branchwatch.utils.month_utils import month_sort_key

# Fixed iteration order, also used to break ties in best_branch_type
BRANCH_TYPE_ORDER = (
    BranchType.MALL,
    BranchType.ROADSIDE,
    BranchType.CAMPUS,
    BranchType.COMMERCIAL,
)


def _month_key(record: PerformanceRecord):
    return month_sort_key(record.month)


def profit(sales: Optional[float], rent_cost: Optional[float]) -> float:
    """Sales minus rent; missing values count as 0. May be negative."""
    return (sales or 0) - (rent_cost or 0)


def rent_ratio(sales: Optional[float], rent_cost: Optional[float]) -> float:
    """
    Rent as a fraction of sales.

    Sales are floored at 1 so the ratio is always finite. This is an
    approximation: months with near-zero sales report a very large ratio.
    """
    return (rent_cost or 0) / max(sales or 0, 1)


def sales_per_staff(sales: Optional[float], staff_count: Optional[int]) -> float:
    """Sales divided by headcount, headcount floored at 1"""
    return (sales or 0) / max(staff_count or 0, 1)


def latest_record(records: Sequence[PerformanceRecord]) -> Optional[PerformanceRecord]:
    """
    Return the record with the chronologically greatest month, or None.

    If several records share the greatest month, the first one in input
    order wins.
    """
    if not records:
        return None
    return max(records, key=_month_key)


def sort_by_month(records: Iterable[PerformanceRecord], descending: bool = False) -> List[PerformanceRecord]:
    """Stable chronological sort (equal months keep input order)"""
    return sorted(records, key=_month_key, reverse=descending)


def sales_decreasing(records: Sequence[PerformanceRecord]) -> bool:
    """
    True when sales fell across the three most recent months.

    With records ordered most-recent-first this is
    ``r[0].sales < r[1].sales < r[2].sales``. Fewer than 3 records is False.
    """
    if not records or len(records) < 3:
        return False

    recent = sort_by_month(records, descending=True)
    return (recent[0].sales or 0) < (recent[1].sales or 0) < (recent[2].sales or 0)


def group_records_by_branch(records: Iterable[PerformanceRecord]) -> Dict[str, List[PerformanceRecord]]:
    """Index records by branch id, keeping input order within each branch"""
    grouped: Dict[str, List[PerformanceRecord]] = defaultdict(list)
    for record in records:
        grouped[record.branch_id].append(record)
    return grouped


def filter_branches(
    branches: Iterable[Branch],
    search: Optional[str] = None,
    branch_type: Optional[BranchType] = None,
) -> List[Branch]:
    """
    Branches matching a search term and/or branch type.

    The search is a case-insensitive substring match on name or address;
    a blank term matches everything.
    """
    term = (search or "").strip().lower()
    return [
        b
        for b in branches
        if (not term or term in b.name.lower() or term in b.address.lower())
        and (branch_type is None or b.branch_type == branch_type)
    ]


def _latest_profits(branches: Iterable[Branch], grouped: Dict[str, List[PerformanceRecord]]) -> List[float]:
    # Branches without records are skipped, not counted as zero
    profits = []
    for branch in branches:
        latest = latest_record(grouped.get(branch.id, []))
        if latest is not None:
            profits.append(profit(latest.sales, latest.rent_cost))
    return profits


def average_profit(branches: Sequence[Branch], all_records: Iterable[PerformanceRecord]) -> float:
    """Mean latest-month profit over the branches that have any records"""
    if not branches:
        return 0.0

    profits = _latest_profits(branches, group_records_by_branch(all_records))
    return sum(profits) / len(profits) if profits else 0.0


def profit_by_branch_type(
    branches: Sequence[Branch],
    all_records: Iterable[PerformanceRecord],
) -> List[BranchTypeProfit]:
    """
    Average latest-month profit per branch type.

    Types with no branches are omitted. A type whose branches all lack
    records is reported with an average of 0.
    """
    if not branches:
        return []

    grouped = group_records_by_branch(all_records)
    result = []

    for branch_type in BRANCH_TYPE_ORDER:
        typed = [b for b in branches if b.branch_type == branch_type]
        if not typed:
            continue

        profits = _latest_profits(typed, grouped)
        result.append(
            BranchTypeProfit(
                branch_type=branch_type,
                avg_profit=sum(profits) / len(profits) if profits else 0.0,
                count=len(typed),
            )
        )

    return result


def best_branch_type(
    branches: Sequence[Branch],
    all_records: Iterable[PerformanceRecord],
) -> Optional[BranchType]:
    """Branch type with the strictly highest average profit, None when not applicable"""
    by_type = profit_by_branch_type(branches, all_records)
    if not by_type:
        return None

    best = by_type[0]
    for current in by_type[1:]:
        if current.avg_profit > best.avg_profit:
            best = current

    return best.branch_type


def sales_trend(records: Iterable[PerformanceRecord]) -> List[SalesPoint]:
    """Month/sales pairs in chronological order"""
    return [SalesPoint(month=r.month, sales=r.sales or 0) for r in sort_by_month(records)]
