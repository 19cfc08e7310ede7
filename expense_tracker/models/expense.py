"""
Input Models for Expense Tracker

These are the rows handed to the engine by the data-fetch layer:
expenses, categories and the monthly budget.

DESIGN DECISION: All models are frozen.
An aggregation pass never mutates what the caller gave it, so the same
objects can be fed to concurrent dashboard builds safely.
"""

import calendar
import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(BaseModel):
    """
    An expense category.

    Expenses refer to a category by id only; the category row is
    looked up when building summaries.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Category identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )
    icon: str = Field(
        default="",
        max_length=16,
        description="Emoji or glyph shown next to the name"
    )
    color: str = Field(
        default="#9CA3AF",
        pattern="^#[0-9A-Fa-f]{6}$",
        description="Hex colour used for charts"
    )


class ExpenseRecord(BaseModel):
    """A single logged expense."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent"
    )
    date: dt.date = Field(
        ...,
        description="Day the expense was made"
    )
    category_id: Optional[str] = Field(
        default=None,
        description="Category this expense belongs to, if any"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Free text note"
    )
    id: Optional[str] = Field(
        default=None,
        description="Row id from the data store"
    )

    @field_validator('category_id')
    @classmethod
    def blank_category_is_none(cls, v: Optional[str]) -> Optional[str]:
        """An empty category id means uncategorised."""
        return v or None


class Period(BaseModel):
    """A calendar month: the unit expenses are aggregated over."""
    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1, le=9999)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def first_day(self) -> dt.date:
        return dt.date(self.year, self.month, 1)

    @property
    def last_day(self) -> dt.date:
        return dt.date(self.year, self.month, self.days_in_month)

    def contains(self, d: dt.date) -> bool:
        return d.year == self.year and d.month == self.month

    def days_elapsed(self, as_of: dt.date) -> int:
        """
        Day of the month reached by `as_of`.

        The current month counts up to today, a past month counts
        all of its days, and a month that hasn't started counts none.
        """
        if as_of < self.first_day:
            return 0
        if as_of > self.last_day:
            return self.days_in_month
        return as_of.day

    def label(self) -> str:
        """e.g. 'February 2024'."""
        return f"{calendar.month_name[self.month]} {self.year}"

    @classmethod
    def of(cls, d: dt.date) -> 'Period':
        return cls(month=d.month, year=d.year)


class Budget(BaseModel):
    """
    The monthly budget a user has set.

    One per (user, month, year). The amount must be positive: a
    dashboard without a budget is shown as "no budget set", never 0%.
    """
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Budget for the month"
    )
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1, le=9999)

    @property
    def period(self) -> Period:
        return Period(month=self.month, year=self.year)
