"""
Metric Primitives

Small pure functions shared by every view: currency and date formatting,
health tiers, burn rate and percentages.

All arithmetic is Decimal. Floats are accepted at the edges but converted
through their string form so 0.1 stays 0.1.
"""

import calendar
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from expense_tracker.config import ThresholdSettings, get_settings
from expense_tracker.models.metrics import HealthTier

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


class InvalidConfigurationError(ValueError):
    """
    Raised when the budget is zero or negative.

    The caller should show a "no budget set" state instead of
    computing percentages against a missing budget.
    """

    def __init__(self, budget: Decimal, message: Optional[str] = None):
        self.budget = budget
        super().__init__(message or f"Budget must be greater than zero, got {budget}")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without picking up float noise."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        result = Decimal(value)
    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def _group_indian(digits: str) -> str:
    # Last three digits, then pairs: 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(
    amount: Number,
    symbol: Optional[str] = None,
    grouping: Optional[str] = None,
) -> str:
    """
    Format an amount for display, e.g. "₹1,00,000.00".

    Always two decimal places (half-up). Negative amounts keep their
    sign, "-₹2,000.00", since exceeded budgets are shown this way.

    Args:
        amount: Amount to format
        symbol: Currency symbol (defaults to the configured one)
        grouping: "indian" or "international" (defaults to configured)
    """
    display = get_settings().display if symbol is None or grouping is None else None
    symbol = display.currency_symbol if symbol is None else symbol
    grouping = display.digit_grouping if grouping is None else grouping

    value = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")

    if grouping == "indian":
        whole = _group_indian(whole)
    elif grouping == "international":
        whole = f"{int(whole):,}"
    else:
        raise ValueError(f"Unknown digit grouping: {grouping}")

    return f"{sign}{symbol}{whole}.{fraction}"


def format_date(d: date, fmt: Optional[str] = None) -> str:
    """Format a date for display, DD/MM/YYYY by default."""
    fmt = fmt or get_settings().display.date_format
    return d.strftime(fmt)


def percent_of(part: Number, whole: Number) -> Decimal:
    """part / whole * 100, or 0 when whole is 0."""
    whole = to_decimal(whole)
    if whole == 0:
        return ZERO
    return to_decimal(part) / whole * HUNDRED


def whole_percent(percent: Number) -> str:
    """A percentage as display text with no decimals, halves rounded up: 62.5 -> "63"."""
    return str(to_decimal(percent).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def health_tier(
    spent: Number,
    budget: Number,
    thresholds: Optional[ThresholdSettings] = None,
) -> HealthTier:
    """
    Classify budget health from percent used.

    >= critical (90%) is CRITICAL, >= warning (70%) is WARNING, else OK.

    Raises:
        InvalidConfigurationError: if budget <= 0
    """
    thresholds = thresholds or get_settings().thresholds
    budget = to_decimal(budget)
    if budget <= 0:
        raise InvalidConfigurationError(budget)

    percent = percent_of(spent, budget)
    if percent >= thresholds.critical_percent:
        return HealthTier.CRITICAL
    if percent >= thresholds.warning_percent:
        return HealthTier.WARNING
    return HealthTier.OK


def burn_rate(spent: Number, days_elapsed: int) -> Decimal:
    """Average spend per elapsed day; 0 before the period starts."""
    if days_elapsed <= 0:
        return ZERO
    return to_decimal(spent) / days_elapsed


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]
