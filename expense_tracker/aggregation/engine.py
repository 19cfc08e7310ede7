"""
Aggregation Engine

Folds one period's expense records into the totals the dashboard charts:
total spent, a per-category breakdown and a zero-filled daily series.

DESIGN DECISION: Single pass, then an explicit sort.
Category totals accumulate in an insertion-ordered dict, so sorting by
total with a stable sort breaks ties by first-seen category.

The data store already filters by date range. Records that still fall
outside the period are dropped (and counted) rather than trusted, so an
off-by-one upstream can't shift the daily series.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Optional, Union

import structlog

from expense_tracker.metrics.primitives import ZERO, percent_of
from expense_tracker.models.expense import Category, ExpenseRecord, Period
from expense_tracker.models.metrics import (
    AggregationResult,
    CategorySummary,
    DailySummary,
)

logger = structlog.get_logger(__name__)

CategoryLookup = Union[Mapping[str, Category], Iterable[Category]]


def category_lookup(categories: CategoryLookup) -> dict[str, Category]:
    """Index categories by id. Mappings are passed through."""
    if isinstance(categories, Mapping):
        return dict(categories)
    return {category.id: category for category in categories}


def aggregate(
    records: Iterable[ExpenseRecord],
    categories: CategoryLookup,
    period_month: int,
    period_year: int,
) -> AggregationResult:
    """
    Aggregate expenses for one month.

    Uncategorised records, and records pointing at an unknown category,
    count towards spent but get no category summary.

    Args:
        records: Expenses for the period, in any order
        categories: Category lookup (mapping by id, or an iterable)
        period_month: 1-12
        period_year: e.g. 2024

    Returns:
        AggregationResult with summaries sorted by total, largest first
    """
    period = Period(month=period_month, year=period_year)
    lookup = category_lookup(categories)

    spent = ZERO
    record_count = 0
    ignored_count = 0
    by_category: dict[str, Decimal] = {}
    by_day: dict[int, Decimal] = {}

    for record in records:
        if not period.contains(record.date):
            ignored_count += 1
            continue

        record_count += 1
        spent += record.amount
        by_day[record.date.day] = by_day.get(record.date.day, ZERO) + record.amount

        if record.category_id is not None and record.category_id in lookup:
            by_category[record.category_id] = (
                by_category.get(record.category_id, ZERO) + record.amount
            )

    if ignored_count:
        logger.warning(
            "records_outside_period",
            period=f"{period.year}-{period.month:02d}",
            ignored_count=ignored_count,
        )

    summaries = [
        CategorySummary(
            category_id=category_id,
            name=lookup[category_id].name,
            icon=lookup[category_id].icon,
            color=lookup[category_id].color,
            total=total,
            percentage_of_spent=percent_of(total, spent),
        )
        for category_id, total in by_category.items()
    ]
    summaries.sort(key=lambda s: s.total, reverse=True)

    daily = tuple(
        DailySummary(
            day=day,
            date=date(period.year, period.month, day),
            total=by_day.get(day, ZERO),
        )
        for day in range(1, period.days_in_month + 1)
    )

    return AggregationResult(
        period=period,
        spent=spent,
        category_summaries=tuple(summaries),
        daily_summaries=daily,
        record_count=record_count,
        ignored_count=ignored_count,
    )


def top_category(summaries: Iterable[CategorySummary]) -> Optional[CategorySummary]:
    """The biggest category with any spending, if there is one."""
    for summary in summaries:
        if summary.total > 0:
            return summary
    return None


def average_daily_spend(daily: Iterable[DailySummary]) -> Decimal:
    """Mean of the daily series; 0 for an empty series."""
    totals = [d.total for d in daily]
    if not totals:
        return ZERO
    return sum(totals, ZERO) / len(totals)


def active_days(daily: Iterable[DailySummary]) -> int:
    """Number of days with any spending."""
    return sum(1 for d in daily if d.total > 0)


def sort_recent_first(records: Iterable[ExpenseRecord]) -> list[ExpenseRecord]:
    """Order expenses for the list view: newest date first, stable otherwise."""
    return sorted(records, key=lambda r: r.date, reverse=True)
