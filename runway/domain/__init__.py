"""Domain models and calculations for runway.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from runway.domain.models import CurrencyCode, ExchangeRates, Frequency, IsoDate, PeriodType

__all__ = ["CurrencyCode", "ExchangeRates", "Frequency", "IsoDate", "PeriodType"]
