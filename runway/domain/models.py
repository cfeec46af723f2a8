"""Domain type definitions for runway.

These NewTypes and Literal vocabularies give the functional core its words:
- CurrencyCode: ISO 4217 code (e.g. "USD")
- IsoDate: Date in YYYY-MM-DD format
- Frequency: How often a cost or income recurs
- PeriodType: Reporting period granularity
"""

from typing import Literal, NewType

# Three-letter ISO currency code, upper case
CurrencyCode = NewType("CurrencyCode", str)

# Dates travel as ISO strings (YYYY-MM-DD) between the store and the core
IsoDate = NewType("IsoDate", str)

Frequency = Literal["weekly", "biweekly", "monthly", "semiannually", "yearly", "one-time"]
PeriodType = Literal["weekly", "monthly", "yearly"]
GoalType = Literal["objective", "monthly", "yearly"]
EntryKind = Literal["cost", "income"]
Timeframe = Literal["6M", "1Y", "2Y", "3Y"]

FREQUENCIES: tuple[str, ...] = ("weekly", "biweekly", "monthly", "semiannually", "yearly", "one-time")
PERIOD_TYPES: tuple[str, ...] = ("weekly", "monthly", "yearly")
GOAL_TYPES: tuple[str, ...] = ("objective", "monthly", "yearly")
ENTRY_KINDS: tuple[str, ...] = ("cost", "income")
TIMEFRAMES: tuple[str, ...] = ("6M", "1Y", "2Y", "3Y")

# Exchange rates relative to one base currency: rates[X] = units of X per 1 base
ExchangeRates = dict[str, float]
