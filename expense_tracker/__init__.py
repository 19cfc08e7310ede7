"""
Expense Tracker - Metrics Engine

The computation layer behind the expense tracker dashboard.
It turns a user's expense rows and monthly budget into the numbers
every view displays.

DESIGN PRINCIPLES:
1. Pure functions in, immutable snapshots out
2. Money is Decimal, never float
3. Fail fast on a missing or non-positive budget
4. No silent corrections (exceeded budgets stay negative)
5. Every dashboard build is auditable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
